# api/liquid_validations/helpers.py
import re
from typing import Iterable, Pattern

CAMEL_BOUNDARY_REGEX = re.compile(r"([a-z\d])([A-Z])")
SEPARATOR_REGEX = re.compile(r"[_\s]+")
LIQUID_WORD_REGEX = re.compile(r"liquid", re.IGNORECASE)
TERMINATED_REGEX = re.compile(r"terminated with regexp:.+")


def friendly_attr_name(attr_name) -> str:
    """
    Render an attribute identifier as lower-case words

    Examples:
        'blog_post_body' -> 'blog post body'
        'blogPostBody'   -> 'blog post body'
        'author_id'      -> 'author'
    """
    name = str(attr_name)
    if name.endswith("_id") and name != "_id":
        name = name[:-3]
    name = CAMEL_BOUNDARY_REGEX.sub(r"\1 \2", name)
    return SEPARATOR_REGEX.sub(" ", name).strip().lower()


def friendly_liquid_error(error) -> str:
    """Strip engine-specific phrasing from a parser error message"""
    message = LIQUID_WORD_REGEX.sub("", str(error))
    return TERMINATED_REGEX.sub("closed", message)


def tag_pattern(tag: str) -> Pattern:
    """Match `{% tag ... %}` with whitespace on both sides of the tag name"""
    return re.compile(r"{%\s+" + re.escape(tag) + r"\s+(.*?)%}")


def variable_pattern(variable: str) -> Pattern:
    """Match `{{ variable }}` with optional trailing content before `}}`"""
    return re.compile(r"\{\{\s*" + re.escape(variable) + r"( .*?)?\}\}")


def contains_within(text: str, container: str, variable: str) -> bool:
    """
    Whether a variable reference appears after an opening `<container ...>`
    and before a later `</container>`.

    The container is matched case-insensitively and may span lines. Each step
    takes the earliest candidate, so no backtracking across the text is needed.
    """
    name = re.escape(container)

    opening = re.compile(r"<\s*" + name, re.IGNORECASE).search(text)
    if not opening:
        return False

    tag_end = text.find(">", opening.end())
    if tag_end == -1:
        return False

    reference = variable_pattern(variable).search(text, tag_end + 1)
    if not reference:
        return False

    closing = re.compile(r"</\s*" + name + r"\s*>", re.IGNORECASE)
    return closing.search(text, reference.end()) is not None


def bracket_tags(tags: Iterable[str]) -> str:
    return "".join(f"{{% {tag} %}}" for tag in tags)
