"""TypeScript emission: type expressions, members, signatures and declarations."""

from .declarations import DeclarationWriter, render_file
from .typescript import (
    DICT_PLACEHOLDER,
    OPTION_EXTENDS,
    OPTION_FUNCTION_RETURN,
    OPTION_PARENTHESIS,
    TypeEmitter,
)
