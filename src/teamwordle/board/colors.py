"""Color mapping from tri-state result codes to display categories."""

from enum import Enum

from teamwordle.core.models import ContractViolation


class LetterColor(Enum):
    """How one guessed letter relates to the secret word."""

    DISPLACED = "displaced"  # in the word, elsewhere
    ABSENT = "absent"
    CORRECT = "correct"


_BY_CODE = {
    -1: LetterColor.DISPLACED,
    0: LetterColor.ABSENT,
    1: LetterColor.CORRECT,
}


def color_for_code(code: int) -> LetterColor:
    """Map a result code in {-1, 0, 1} to its color. Anything else is a defect."""
    # bool is an int subclass; True must not pass as 1
    if type(code) is not int or code not in _BY_CODE:
        raise ContractViolation(f"color code {code!r} outside {{-1, 0, 1}}")
    return _BY_CODE[code]
