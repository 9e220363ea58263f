"""
Containers used internally by **pyunitex**.

Contains:
    - ``WriteOnceDict``: Dictionary where keys can only be set once.
"""
from collections.abc import MutableMapping

# Written by Eric J. Whitney, January 2020.

# ======================================================================


class WriteOnceDict(MutableMapping, dict):
    """
    Dictionary subclass that prevents overwriting of values when the key
    is already in use.  Keys are allowed to be deleted, and after delete
    the key can be used again.  Unit registries use this to reject a
    symbol that appears twice in the same catalog, and the
    simplification cache uses it so that the first stored result for a
    key is the one every caller sees.

    Adapted from https://stackoverflow.com/a/21601690

    Examples
    --------
    >>> symbols = WriteOnceDict({'m': 'metre', 's': 'second'})
    >>> symbols['m'] = 'mile'  # Raises KeyError - already in use.
    Traceback (most recent call last):
    ...
    KeyError: "Overwriting key 'm' not allowed."
    >>> symbols.setdefault('m', 'mile')  # Existing value is kept.
    'metre'
    >>> del symbols['m']
    >>> symbols['m'] = 'mile'  # OK. Key was deleted beforehand.
    >>> symbols
    {'s': 'second', 'm': 'mile'}
    """
    # These dict methods override the MutableMapping versions.
    __delitem__ = dict.__delitem__
    __getitem__ = dict.__getitem__
    __iter__ = dict.__iter__
    __len__ = dict.__len__
    clear = dict.clear
    setdefault = dict.setdefault

    def __setitem__(self, key, value):
        if key in self:
            raise KeyError(f"Overwriting key '{key}' not allowed.")
        dict.__setitem__(self, key, value)
