"""
Argument string parsing for script invocation.

Turns the argument string typed into a button's settings into the argument
vector handed to the script. The grammar is a forgiving subset of shell
word-splitting: whitespace separates arguments, single or double quotes
group them, and a backslash inside quotes escapes a quote or another
backslash. Malformed input never raises.
"""

from typing import List, Optional

QUOTE_CHARS = ('"', "'")
WHITESPACE_CHARS = (" ", "\t")
ESCAPABLE_CHARS = ('"', "'", "\\")


class ArgumentStringParser:
    """
    Parses argument strings into lists of arguments, handling quotes and escapes.

    The parser holds no state between calls, so a single instance can be
    shared freely between threads.

    Example:
        >>> parser = ArgumentStringParser()
        >>> parser.parse("5")
        ['5']
        >>> parser.parse("'one two' three")
        ['one two', 'three']
        >>> parser.parse("'\\"wrapped\\"'")
        ['"wrapped"']
    """

    def parse(self, literal: str) -> List[str]:
        """
        Parse the string entered by the user into a list of script arguments.

        Args:
            literal: The argument string to parse

        Returns:
            Arguments in the order they appear. Never contains empty strings.
        """
        args: List[str] = []
        current: List[str] = []
        in_quotes = False
        quote_char: Optional[str] = None

        i = 0
        length = len(literal)
        while i < length:
            char = literal[i]

            if not in_quotes:
                if char in QUOTE_CHARS:
                    in_quotes = True
                    quote_char = char
                elif char in WHITESPACE_CHARS:
                    if current:
                        args.append("".join(current))
                        current = []
                    # A run of separators counts once
                    while i + 1 < length and literal[i + 1] in WHITESPACE_CHARS:
                        i += 1
                else:
                    current.append(char)

            elif char == quote_char:
                in_quotes = False
                quote_char = None

            elif char == "\\" and i + 1 < length and literal[i + 1] in ESCAPABLE_CHARS:
                current.append(literal[i + 1])
                i += 1

            else:
                current.append(char)

            i += 1

        # Unclosed quotes still yield their content
        if current:
            args.append("".join(current))

        return args


def parse_arguments(literal: Optional[str]) -> List[str]:
    """
    Parse an optional argument string from button settings.

    Missing or empty settings mean "no arguments" and skip the parser.
    """
    if not literal:
        return []
    return ArgumentStringParser().parse(literal)
