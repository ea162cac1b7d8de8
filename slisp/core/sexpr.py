"""S-expression tree produced by the parser.

```
<sexpr> ::= Number(float)
          | String(str)        ; literal text as scanned, surrounding quotes included
          | Symbol(str)        ; opaque: '+', 't', 'nil' are not special here
          | List(<sexpr>*)
```

Lists own their children and are built bottom-up, so trees never share nodes or contain cycles. str() serializes a
tree back to source text that scans and parses to an equal tree; display() is meant for humans.
"""

import math
from abc import ABC, abstractmethod
from decimal import Decimal


class SExpression(ABC):
    """Superclass of every node in an S-expression tree."""

    def __init__(self, value):
        self.value = value
        self._cls = type(self).__name__

    @abstractmethod
    def serialize(self):
        """Returns source text for this node."""

    @property
    def nodes(self):
        """Child nodes. Only Lists have any."""
        return []

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        List(nodes=[
            Symbol('+'),
            List(nodes=[
                ...
            ])
        ])
        """
        if not self.nodes:
            return f"{'    ' * indents}{self!r}"

        result = f"{'    ' * indents}{self._cls}(nodes=["
        for node in self.nodes:
            result += "\n" + node.display(indents + 1) + ","
        return result[:-1] + f"\n{'    ' * indents}])"

    def __repr__(self):
        return f"{self._cls}({self.value!r})"

    def __str__(self):
        return self.serialize()

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.value == other.value

    def __hash__(self):
        return hash((self._cls, self.serialize()))


class Number(SExpression):
    """Finite numbers only: the scanner has no spelling for inf or nan."""

    def __init__(self, value):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"{value!r} cannot be read back as a number")
        super().__init__(value)

    def serialize(self):
        if self.value.is_integer():
            return str(int(self.value))
        # shortest round-tripping digits, without the exponent the scanner does not read
        return format(Decimal(repr(self.value)), "f")


class String(SExpression):

    def serialize(self):
        return self.value


class Symbol(SExpression):

    def serialize(self):
        return self.value


class List(SExpression):

    def __init__(self, value=None):
        super().__init__(list(value) if value is not None else [])

    @property
    def nodes(self):
        return self.value

    def serialize(self):
        return "(" + " ".join(node.serialize() for node in self.value) + ")"

    def __len__(self):
        return len(self.value)

    def __getitem__(self, idx):
        return self.value[idx]

    def __iter__(self):
        return iter(self.value)
