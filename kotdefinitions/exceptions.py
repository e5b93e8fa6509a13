"""
KotDefinitions Exceptions

Custom exception hierarchy for the definition resolution engine
"""


class KotDefinitionsError(Exception):
    """
    Base exception for all KotDefinitions errors.

    All KotDefinitions-specific exceptions inherit from this class.
    You can catch this to handle any resolution error generically.

    Example:
        >>> try:
        ...     phone = definition.resolve(lookup)
        ... except KotDefinitionsError as e:
        ...     print(f"Definition error: {e}")
    """

    pass


class NotInstantiableError(KotDefinitionsError):
    """
    Raised when a class or a required parameter cannot be resolved to a value.

    Common causes:
        - The definition targets an abstract class or a Protocol
        - A dotted class path that cannot be imported
        - A parameter without type hint and without default value
        - A parameter of builtin type (``int``, ``str``, ...) without default
        - A parameter of a native (C) routine whose default is not available

    Solution:
        Specify the argument explicitly in the definition::

            definition = ObjectDefinition.from_config({
                ObjectDefinition.CLASS: Phone,
                ObjectDefinition.CONSTRUCTOR: {"name": "Kiradzu"},
            })

        Or register the dependency type in the lookup service so it
        can be injected.
    """

    pass


class InvalidConfigError(KotDefinitionsError):
    """
    Raised when a definition is self-contradictory or a resolved value has
    the wrong type.

    Common causes:
        - Arguments indexed both by name and by position in the same mapping
        - Unknown configuration keys in ``ObjectDefinition.from_config()``
        - Constructor arguments for a class without its own ``__init__``
        - The lookup service returned a value that is not an instance of
          the declared parameter type

    Solution:
        Use either a list (positional) or a name-keyed mapping::

            # Good
            {ObjectDefinition.CONSTRUCTOR: ["Taruto", "1.0"]}
            {ObjectDefinition.CONSTRUCTOR: {"name": "Taruto", "version": "1.0"}}

            # Bad
            {ObjectDefinition.CONSTRUCTOR: {"name": "Taruto", 1: "1.0"}}
    """

    pass


class ArgumentError(KotDefinitionsError, TypeError):
    """
    Raised when an argument value has a shape the target parameter can't take.

    This error occurs when a named argument for a variadic (``*args``)
    parameter is not a list or tuple.

    Solution:
        Pass a list for the variadic parameter::

            # Good
            {"colors": ["red", "green"]}

            # Bad - a single string is not spread into *colors
            {"colors": "red"}
    """

    pass


class ServiceNotFoundError(KotDefinitionsError, LookupError):
    """
    Raised by a lookup service when an id is not registered.

    When resolving an optional parameter, this error is recovered from
    by falling back to the parameter's default value. In every other
    situation it propagates to the caller unchanged.

    Solution:
        Register the id in the lookup service::

            lookup = SimpleLookup({EngineInterface: EngineMarkOne()})

    Note:
        The error message of ``SimpleLookup`` includes the list of
        registered ids to help identify available services.
    """

    def __init__(self, id, message=None):
        self.id = id
        super().__init__(message or f"No definition or class found for \"{id}\".")


class CircularDependencyError(KotDefinitionsError):
    """
    Raised when a circular dependency is detected during resolution.

    This error occurs when class A depends on class B, and class B
    (directly or indirectly) depends on class A. It is never recovered
    from, even for optional parameters.

    Example of circular dependency::

        class ServiceA:
            def __init__(self, b: ServiceB): ...

        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!

    Solution:
        1. Refactor to remove the circular dependency
        2. Break the cycle by setting one side through a mutator::

            ObjectDefinition.from_config({
                ObjectDefinition.CLASS: ServiceB,
                "set_a()": [Reference.to(ServiceA)],
            })
    """

    pass
