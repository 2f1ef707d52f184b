"""Lexical scopes. An Env maps names to Values and delegates to its enclosing Env for anything it does not bind.

A child Env holds a reference to its parent, never the other way around, so the chain cannot form a cycle and the
parent lives at least as long as any child that can reach it.
"""

from arrowlang.lang.error import UndeclaredVariable


class Env:
    """One scope in a chain of nested scopes."""

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}  # dict of name: Value bound in this scope only

    @classmethod
    def new_root(cls):
        """Scope with no parent and no bindings."""
        return cls()

    @classmethod
    def new_child(cls, parent):
        """Scope whose lookups and failed assignments delegate to parent."""
        return cls(parent)

    def declare(self, name, value):
        """Binds name to value in this scope only, overwriting any binding name already has here."""
        self.values[name] = value

    def assign(self, name, value):
        """Overwrites the innermost binding of name. Returns whether such a binding exists: assign never declares."""
        if name in self.values:
            self.values[name] = value
            return True
        elif self.enclosing is not None:
            return self.enclosing.assign(name, value)
        return False

    def lookup(self, name):
        """Value of the innermost binding of name. Raises UndeclaredVariable if no scope in the chain binds it."""
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.enclosing
        raise UndeclaredVariable(name)

    def is_declared(self, name):
        """Whether name is visible from this scope."""
        env = self
        while env is not None:
            if name in env.values:
                return True
            env = env.enclosing
        return False

    def __contains__(self, name):
        return self.is_declared(name)

    def __repr__(self):
        bindings = ", ".join(f"{name}={value}" for name, value in self.values.items())
        return f"Env({bindings})" if self.enclosing is None else f"Env({bindings}) -> {self.enclosing!r}"
