"""
jsonoptional utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the value type, the faults and the
  framework bindings.

Overview
- styles(defaults)
  • Merge built-in rich styles with host overrides read from __main__.__styles__.

- requirecallable(object, name)
  • Eagerly validate a callback argument so misuse fails before any state check.

- typeargument(type)
  • Extract the single type argument of a parametrized generic (or Any when bare).

Stability and contract
- Names not in __all__ are internal and may change without notice.
"""
import builtins
from collections import defaultdict
from typing import Any, get_args, get_origin


def styles(defaults, /):
    """
    Resolve rich styles for a renderer.

    The host application may expose a __styles__ mapping in __main__ to
    override any of the given defaults. Unknown names resolve to the empty
    style so renderers never fail on a missing key.

    Examples
    - styles({"hint": "italic"})["hint"]     -> "italic" (unless overridden)
    - styles({"hint": "italic"})["missing"]  -> ""
    """
    main = __import__("__main__")
    return defaultdict(str, {**defaults, **getattr(main, "__styles__", {})})


def requirecallable(object, name, /):
    """
    Return object when it is callable, otherwise raise TypeError.

    The name is the qualified operation used in the message, e.g. "map()".
    """
    if not builtins.callable(object):
        raise TypeError("%s argument must be callable, not %s" % (name, type(object).__name__))
    return object


def typeargument(type, origin, /):
    """
    Return the payload type declared by origin[X].

    - origin[X] -> X
    - origin    -> Any   (bare, unparametrized use)
    - anything else raises TypeError; callers translate it to their own fault.
    """
    if type is origin:
        return Any
    if get_origin(type) is not origin:
        raise TypeError("expected %s or %s[...], got %r" % (origin.__name__, origin.__name__, type))
    arguments = get_args(type)
    if len(arguments) != 1:
        raise TypeError("%s takes exactly one type argument, got %d" % (origin.__name__, len(arguments)))
    return arguments[0]


__all__ = (
    "styles",
    "requirecallable",
    "typeargument",
)
