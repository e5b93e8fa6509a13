"""
Type hints

Helpers that turn a callable's signature and annotations into the facts
parameter definitions are built from:

- Resolving type hints, including forward references and PEP 563 strings
- Unwrapping Optional[X] / X | None into (X, nullable)
- Telling builtin scalar/collection types apart from injectable classes
- Naming callables for error messages
"""

import ast
import inspect
import types
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple, Union, get_args, get_origin

from .exceptions import NotInstantiableError

_UNION_ORIGINS = (Union, getattr(types, 'UnionType', Union))

_BUILTIN_TYPES = (
    int, float, complex, bool, str, bytes, bytearray,
    list, dict, tuple, set, frozenset, type, object,
)

_BUILTIN_MODULES = ('builtins', 'typing', 'collections.abc')


def constructor_of(cls: type) -> Optional[Callable]:
    """Return the routine that takes a class's constructor arguments.

    That is ``__init__`` unless the class only customizes ``__new__``
    (named tuples, for one). None when the class takes no arguments.
    """
    if cls.__init__ is not object.__init__:
        return cls.__init__
    if cls.__new__ is not object.__new__:
        return cls.__new__
    return None


def callable_name(func: Any) -> str:
    """Name a callable the way error messages refer to it: ``Phone.set_id()``."""
    if isinstance(func, type):
        return f"{func.__qualname__}.__init__()"
    func = getattr(func, '__func__', func)
    name = getattr(func, '__qualname__', None) or getattr(func, '__name__', None) or repr(func)
    return f"{name}()"


def is_native(func: Any) -> bool:
    """True for routines implemented in C, whose defaults may be unavailable."""
    return inspect.isroutine(func) and not (inspect.isfunction(func) or inspect.ismethod(func))


def get_signature(func: Callable) -> inspect.Signature:
    """Return the signature of ``func``.

    Raises:
        NotInstantiableError: When the signature cannot be introspected,
            which happens with some native routines
    """
    try:
        return inspect.signature(func)
    except ValueError as e:
        raise NotInstantiableError(
            f"Can not inspect {callable_name(func)}: {e}. "
            f"This may occur with native routines. Please specify arguments explicitly."
        ) from e
    except TypeError as e:
        raise NotInstantiableError(
            f"Can not get signature for {callable_name(func)}: {e}. "
            f"Ensure it is a callable."
        ) from e


def resolve_type_hints(func: Callable) -> Dict[str, Any]:
    """Resolve type hints of ``func`` with typing.get_type_hints().

    Forward references that can't be evaluated make get_type_hints() fail
    as a whole. In that case an empty dict is returned and each string
    annotation is resolved on its own by resolve_string_annotation().
    """
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, RecursionError):
        return {}


def resolve_string_annotation(func: Callable, param_name: str, annotation: str) -> Any:
    """Evaluate a string annotation in the namespace ``func`` was defined in.

    Raises:
        NotInstantiableError: When the annotation does not name a type
            visible from the function's module
    """
    target = getattr(func, '__func__', func)
    namespace: Dict[str, Any] = {}
    module = inspect.getmodule(target)
    if module is not None:
        namespace.update(vars(module))
    namespace.update(getattr(target, '__globals__', {}))
    namespace.setdefault('Union', Union)
    namespace.setdefault('Optional', Optional)

    try:
        return eval(convert_union_syntax(annotation), namespace)
    except NameError as e:
        raise NotInstantiableError(
            f"Can not resolve forward reference '{annotation}' for parameter "
            f"'{param_name}' of {callable_name(func)}. "
            f"Hint: Ensure '{annotation}' is defined and imported in the module "
            f"of {callable_name(func)}."
        ) from e
    except SyntaxError as e:
        raise NotInstantiableError(
            f"Invalid forward reference '{annotation}' for parameter "
            f"'{param_name}' of {callable_name(func)}: {e}."
        ) from e


def convert_union_syntax(annotation: str) -> str:
    """Rewrite PEP 604 unions (``X | Y``) as ``Union[X, Y]``.

    Needed on interpreters and for types that don't support the ``|``
    operator at runtime.

    Example::

        >>> convert_union_syntax('Engine | None')
        'Union[Engine, None]'
    """
    if '|' not in annotation:
        return annotation

    try:
        tree = ast.parse(annotation, mode='eval')
    except SyntaxError:
        return annotation

    class UnionTransformer(ast.NodeTransformer):
        def visit_BinOp(self, node: ast.BinOp) -> ast.AST:
            if not isinstance(node.op, ast.BitOr):
                self.generic_visit(node)
                return node
            members = [self.visit(member) for member in _union_members(node)]
            return ast.Subscript(
                value=ast.Name(id='Union', ctx=ast.Load()),
                slice=ast.Tuple(elts=members, ctx=ast.Load()),
                ctx=ast.Load()
            )

    new_tree = ast.fix_missing_locations(UnionTransformer().visit(tree))
    return ast.unparse(new_tree.body)


def _union_members(node: ast.AST) -> List[ast.AST]:
    # X | Y | Z parses as (X | Y) | Z, flatten it into [X, Y, Z]
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _union_members(node.left) + _union_members(node.right)
    return [node]


def unwrap_optional(hint: Any) -> Tuple[Any, bool]:
    """Split ``Optional[X]`` into ``(X, True)``.

    Unions of several non-None members are returned as they are.
    """
    if get_origin(hint) not in _UNION_ORIGINS:
        return hint, hint is type(None)

    members = [arg for arg in get_args(hint) if arg is not type(None)]
    nullable = len(members) < len(get_args(hint))
    if len(members) == 1:
        return members[0], nullable
    return Union[tuple(members)], nullable


def is_builtin_type(hint: Any) -> bool:
    """True for scalar/collection types, which are never looked up."""
    if hint is Any:
        return True
    origin = get_origin(hint)
    if origin is not None:
        if origin in _UNION_ORIGINS or origin is typing.Literal:
            return True
        return getattr(origin, '__module__', None) in _BUILTIN_MODULES
    if isinstance(hint, type):
        return hint in _BUILTIN_TYPES or hint.__module__ in _BUILTIN_MODULES
    # TypeVar, NewType and other typing constructs
    return True


def injectable_type(hint: Any) -> Any:
    """Reduce a parameterized user generic (``Repository[User]``) to its class."""
    origin = get_origin(hint)
    if origin is not None and isinstance(origin, type):
        return origin
    return hint
