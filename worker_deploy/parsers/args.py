"""Argument string tokenizer.

Splits raw ``upload_args`` / ``deploy_args`` input strings into argv lists.
This is a small subset of shell word splitting: single and double quotes
group whitespace into one token, nothing else is special.
"""

QUOTES = ("'", '"')


def split_args(raw: str) -> list[str]:
    """Split a raw argument string into a list of arguments.

    Quote characters are consumed, adjacent quoted and unquoted segments join
    into one token (``a"b c"d`` -> ``["ab cd"]``) and an unterminated quote
    runs to the end of the string. There are no escapes, and a token that
    ends up empty (``""``) is dropped.
    """
    if not raw.strip():
        return []

    args: list[str] = []
    current = ""
    quote: str | None = None

    for ch in raw:
        if quote:
            if ch == quote:
                quote = None
            else:
                current += ch
            continue

        if ch in QUOTES:
            quote = ch
            continue

        if ch.isspace():
            if current:
                args.append(current)
                current = ""
            continue

        current += ch

    if current:
        args.append(current)

    return args
