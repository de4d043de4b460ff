from typing import Iterable

SENTENCE_END = (".", "!", "?", ";")


def format_output(tokens: Iterable[str]) -> str:
    """Join tokens into display text, capitalizing the start of each sentence."""
    out = []
    capitalize_next = True
    for token in tokens:
        if capitalize_next and token:
            token = token[0].upper() + token[1:]
        capitalize_next = token.endswith(SENTENCE_END)
        out.append(token)
    return " ".join(out)
