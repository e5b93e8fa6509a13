"""
ArgumentBinder

This module reconciles the arguments a definition supplies for a callable
with the callable's parameters, producing the ``*args`` and ``**kwargs``
to call it with.

Arguments come either as a list (by position) or as a mapping keyed all by
position (int) or all by parameter name (str). Parameters nobody supplied
an argument for are resolved through their ParameterDefinition.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union, TYPE_CHECKING

from .exceptions import ArgumentError, InvalidConfigError
from .reference import resolve_argument

if TYPE_CHECKING:
    from .lookup import LookupService
    from .parameter_definition import ParameterDefinition

ArgumentKey = Union[int, str]
Arguments = Union[Sequence[Any], Mapping[ArgumentKey, Any]]


def normalize_arguments(arguments: Optional[Arguments]) -> Dict[ArgumentKey, Any]:
    """Turn an argument list or mapping into a key-to-value dict.

    Lists and tuples become position-keyed dicts.

    Raises:
        InvalidConfigError: When ``arguments`` is neither a list nor a mapping
    """
    if arguments is None:
        return {}
    if isinstance(arguments, Mapping):
        return dict(arguments)
    if isinstance(arguments, (list, tuple)):
        return dict(enumerate(arguments))
    raise InvalidConfigError(
        f"Arguments must be a list, a tuple or a mapping, {type(arguments).__name__} given."
    )


def is_integer_indexed(arguments: Mapping[ArgumentKey, Any]) -> bool:
    """Tell position-keyed arguments from name-keyed ones.

    Raises:
        InvalidConfigError: When keys of both kinds, or keys of any other
            kind, are present
    """
    has_positions = False
    has_names = False
    for key in arguments:
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            raise InvalidConfigError(
                f"Argument keys must be positions (int) or parameter names (str), "
                f"{type(key).__name__} given."
            )
        if isinstance(key, int):
            has_positions = True
        else:
            has_names = True

    if has_positions and has_names:
        raise InvalidConfigError(
            "Arguments indexed both by name and by position are not allowed in the same array."
        )
    return has_positions


def bind_arguments(
    arguments: Optional[Arguments],
    parameters: List['ParameterDefinition'],
    lookup: 'LookupService',
    reference_lookup: Optional['LookupService'] = None,
) -> Tuple[List[Any], Dict[str, Any]]:
    """Bind supplied arguments to parameters.

    Args:
        arguments: Supplied arguments (list, or mapping keyed by int or str)
        parameters: Parameter definitions of the target callable
        lookup: Lookup service for unresolved parameters and definitions
        reference_lookup: Lookup service for References, when it differs
            from ``lookup``

    Returns:
        Tuple of positional arguments and keyword arguments, ready for
        ``target(*args, **kwargs)``

    Raises:
        InvalidConfigError: On mixed keys or arguments no parameter takes
        ArgumentError: When a named variadic argument is not a list or tuple
        NotInstantiableError: When a parameter can't be resolved

    Example::

        def make(name: str, version: str = "1.0", *colors: str): ...

        bind_arguments({0: "Retro", 2: "red", 3: "blue"}, parameters, lookup)
        # (["Retro", "1.0", "red", "blue"], {})
    """
    supplied = normalize_arguments(arguments)
    by_position = is_integer_indexed(supplied)

    def resolve(value: Any) -> Any:
        return resolve_argument(value, lookup, reference_lookup)

    args: List[Any] = []
    kwargs: Dict[str, Any] = {}
    used = set()
    position = 0

    for parameter in parameters:
        if parameter.is_keyword_variadic:
            continue

        if parameter.is_variadic:
            args.extend(
                resolve(value)
                for value in _variadic_values(parameter, supplied, by_position, position, used)
            )
            continue

        if parameter.is_keyword_only:
            key = None if by_position else parameter.name
        else:
            key = position if by_position else parameter.name
            position += 1

        if key is not None and key in supplied:
            value = resolve(supplied[key])
            used.add(key)
        else:
            value = parameter.resolve(lookup)

        if parameter.is_keyword_only:
            kwargs[parameter.name] = value
        else:
            args.append(value)

    unused = [key for key in supplied if key not in used]
    if unused:
        if by_position or not any(p.is_keyword_variadic for p in parameters):
            target = parameters[0].callable_name if parameters else "the callable"
            raise InvalidConfigError(
                f"Unknown argument(s) {', '.join(repr(key) for key in unused)} for {target}."
            )
        for key in unused:
            kwargs[key] = resolve(supplied[key])

    return args, kwargs


def _variadic_values(
    parameter: 'ParameterDefinition',
    supplied: Dict[ArgumentKey, Any],
    by_position: bool,
    position: int,
    used: set,
) -> List[Any]:
    if by_position:
        keys = sorted(key for key in supplied if key >= position)
        used.update(keys)
        return [supplied[key] for key in keys]

    if parameter.name not in supplied:
        return []

    value = supplied[parameter.name]
    if not isinstance(value, (list, tuple)):
        raise ArgumentError(
            f'Named argument for a variadic parameter should be a list or tuple, '
            f'"{type(value).__name__}" given.'
        )
    used.add(parameter.name)
    return list(value)
