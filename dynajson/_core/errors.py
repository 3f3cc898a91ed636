class ElementError(Exception):
    pass


class ReadOnlyError(ElementError):
    pass


class StateError(ElementError):
    pass


class ElementTypeError(ElementError, TypeError):
    pass


class ParseError(ElementError, ValueError):
    pass


class LoadError(ElementError, OSError):
    pass
