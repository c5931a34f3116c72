import re

# Acronym run before a capitalised word ("OAuth" -> "O", "Auth"), capitalised
# or lower-case words, remaining upper-case runs, digit runs.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def split_words(text: str) -> list:
    """Split camelCase, snake_case, kebab-case and spaced text into words."""
    return _WORD_RE.findall(text or "")


def pascal_case(text: str) -> str:
    """
    Convert a model name to PascalCase.

    Example: pascal_case("customer") => "Customer"
    Example: pascal_case("order-item") => "OrderItem"
    Example: pascal_case("myModel") => "MyModel"
    Example: pascal_case("APIKey") => "ApiKey"
    """
    return "".join(word[0].upper() + word[1:].lower() for word in split_words(text))


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def type_display_name(type_) -> str:
    """Readable name of a raw descriptor type for error messages."""
    if type_ is None:
        return "undefined"
    if isinstance(type_, str):
        return type_
    if isinstance(type_, (list, tuple)):
        return "[" + ", ".join(type_display_name(t) for t in type_) + "]"
    if isinstance(type_, dict):
        return "object"
    return getattr(type_, "__name__", str(type_))
