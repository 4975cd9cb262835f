"""
BindingContext - The environment of names bound while a chain is evaluated.
"""


class BindingContext:
    """
    Mapping from binding name to the value its step produced.

    A fresh context is created for every evaluation and grows as steps
    succeed. Later bindings overwrite earlier ones with the same name.
    Bindings can be read as items (``context['a']``) or attributes
    (``context.a``); names that clash with a method need item access.
    """

    def __init__(self, data=None):
        """
        Initialize the BindingContext with optional initial bindings.

        Args:
            data: Mapping of initial bindings (optional, copied)
        """
        object.__setattr__(self, '_data', dict(data) if data is not None else {})

    def get(self, name, default=None):
        """
        Get the value bound to a name.

        Args:
            name: The binding name to look up
            default: Value returned when the name is unbound

        Returns:
            The bound value, or default if the name is unbound
        """
        return self._data.get(name, default)

    def set(self, name, value):
        """
        Bind a name to a value, replacing any earlier binding.

        Returns:
            self (for method chaining)
        """
        self._data[name] = value
        return self

    def has(self, name):
        """Return True if the name is bound."""
        return name in self._data

    def remove(self, name):
        """
        Remove a binding if present.

        Returns:
            self (for method chaining)
        """
        self._data.pop(name, None)
        return self

    def clear(self):
        """Remove every binding."""
        self._data.clear()
        return self

    def keys(self):
        return self._data.keys()

    def values(self):
        return self._data.values()

    def items(self):
        return self._data.items()

    def to_dict(self):
        """Return a copy of the bindings as a plain dictionary."""
        return self._data.copy()

    def copy(self):
        """Return an independent context holding the same bindings."""
        return BindingContext(self._data)

    def __getitem__(self, name):
        return self._data[name]

    def __getattr__(self, name):
        # Only reached when normal attribute lookup fails
        if name.startswith('__') or name == '_data':
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"'{name}' is not bound in this context") from None

    def __setattr__(self, name, value):
        raise AttributeError("BindingContext bindings are set with set()")

    def __contains__(self, name):
        return name in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __eq__(self, other):
        if isinstance(other, BindingContext):
            return self._data == other._data
        return NotImplemented

    def __repr__(self):
        return f"BindingContext({self._data})"

    def __str__(self):
        return str(self._data)
