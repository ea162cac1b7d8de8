"""Handles interactive/command-line mode for the slisp reader. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """slisp reader shell."""
    intro = "slisp reader :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._first_line_num = 0
        self.line_num = 0

    def default(self, line):
        """Reads arbitrary slisp source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._first_line_num = self.line_num

            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self._first_line_num)
                self.sess.run()

    def onecmd(self, line):
        """Every line is source, except for the shell's own commands outside of a continuation."""
        if self._tmp_line and line != "EOF":
            self.default(line)
            return False
        return super().onecmd(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the slisp reader!\n\n"
              "Type an S-expression such as '(+ 1 2.5)' and the reader will print it back\n"
              "as it was understood. Lists left open continue on the next line. Start the\n"
              "reader with --tokens to see the scanner's tokens, or --tree to see the parsed\n"
              "tree. Type 'exit' or press Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Exits reader."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits reader."""
        return True
