"""Plain-text cleanup for package manager output."""

# Color fragments npm audit emits even when writing to a pipe. The bare
# forms cover output whose escape byte was already stripped.
ANSI_FRAGMENTS: tuple[str, ...] = ("\x1b[90m", "\x1b[39m", "[90m", "[39m")


def sanitize_line(line: str) -> str:
    """Keep only alphanumeric and whitespace characters, then trim."""
    return "".join(c for c in line if c.isalnum() or c.isspace()).strip()


def sanitize_audit_output(text: str) -> str:
    """Turn colored audit output into diff-friendly plain text.

    Known ANSI color fragments are removed first, then every line is
    reduced to alphanumeric and whitespace characters and trimmed.
    Lines are split on ``\\n`` only, so line order and line count are
    preserved and blank lines stay as empty strings. Carriage returns
    are whitespace and disappear with the trim. Sanitizing twice gives
    the same text as sanitizing once.

    Args:
        text: Raw captured output.

    Returns:
        Sanitized text with lines joined by newlines.
    """
    for fragment in ANSI_FRAGMENTS:
        text = text.replace(fragment, "")
    return "\n".join(sanitize_line(line) for line in text.split("\n"))
