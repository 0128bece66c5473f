# api/liquid_validations/parser.py
import re
from liquid import Environment
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

class LiquidParser:
    """Syntax oracle backed by python-liquid"""

    # Regex patterns
    RAW_BLOCK_REGEX = re.compile(r"{%-?\s*raw\s*-?%}.*?{%-?\s*endraw\s*-?%}", re.DOTALL)
    OPEN_DELIMITER_REGEX = re.compile(r"{{|{%")

    # Opening delimiter -> (closing delimiter, markup kind)
    DELIMITERS = {
        "{{": ("}}", "Variable"),
        "{%": ("%}", "Tag"),
    }

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or Environment()

    def parse(self, text: str) -> List[str]:
        """
        Parse template text

        Returns a list of error messages for unterminated markup. Errors found
        by the template engine itself are raised as `liquid.exceptions.LiquidError`.
        """
        errors = self.find_unterminated(text)
        if errors:
            return errors

        self.env.from_string(text)
        return []

    def find_unterminated(self, text: str) -> List[str]:
        """Find the first `{{` or `{%` that is never closed"""
        # python-liquid lexes an unclosed delimiter as literal text
        text = self.RAW_BLOCK_REGEX.sub("", text)
        position = 0

        while True:
            match = self.OPEN_DELIMITER_REGEX.search(text, position)
            if not match:
                return []

            opening = match.group()
            closing, kind = self.DELIMITERS[opening]
            end = text.find(closing, match.end())

            if end == -1:
                logger.debug(f"Unterminated {kind.lower()} at offset {match.start()}")
                escaped = "".join(f"\\{char}" for char in closing)
                return [
                    f"Liquid syntax error: {kind} '{opening}' was not properly "
                    f"terminated with regexp: /{escaped}/"
                ]

            position = end + len(closing)
