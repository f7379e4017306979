"""Scope-chain value store for the interpreter."""

from treelox.lang.error import LoxError


class Environment:
    """Stack of scope frames, each a dict of name: value. Lookups and assignments walk the frames innermost first and
    act on the first frame holding the name; definitions always go in the innermost frame, so inner names may shadow
    outer ones. The outermost (global) frame lives as long as the Environment.

    Used as a context manager, an Environment pushes a frame on enter and pops it on exit, whether or not an exception
    is propagating:

        with environment:
            environment.define("x", 1.0)
    """

    def __init__(self):
        self.frames = [{}]

    @property
    def depth(self):
        """Number of frames, the global frame included."""
        return len(self.frames)

    def enter_scope(self):
        self.frames.append({})

    def exit_scope(self):
        if len(self.frames) == 1:
            raise LoxError("cannot exit the global scope", internal=True)
        self.frames.pop()

    def unwind(self, depth):
        """Pops frames until only depth of them are left."""
        del self.frames[max(depth, 1):]

    def define(self, name, value):
        self.frames[-1][name] = value

    def get(self, name):
        """Returns the value bound to name in the innermost frame defining it. Raises KeyError if name is unbound
        (None is the legal value nil, so it cannot signal absence).
        """
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        raise KeyError(name)

    def assign(self, name, value):
        """Rebinds name in the innermost frame defining it. Returns whether or not a binding was found: assignment
        never creates a new binding.
        """
        for frame in reversed(self.frames):
            if name in frame:
                frame[name] = value
                return True
        return False

    def __contains__(self, name):
        return any(name in frame for frame in self.frames)

    def __enter__(self):
        self.enter_scope()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.exit_scope()
        return False
