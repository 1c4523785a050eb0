"""
LaTeX Tools

Small LaTeX generation helpers shared by the templating context.

Self-contained module with no project dependencies.
"""

from typing import List


def to_latex(plaintext_str: str) -> str:
    """
    Convert plaintext to LaTeX by escaping special characters.

    Conversions:
    - \\ → \\textbackslash{} (backslash, must be first to avoid double-escaping)
    - % → \\%
    - $ → \\$
    - & → \\&
    - _ → \\_
    - # → \\#
    - { → \\{
    - } → \\}
    - ~ → \\textasciitilde{}
    - ^ → \\textasciicircum{}

    Args:
        plaintext_str: Plain text string

    Returns:
        LaTeX string with special characters escaped

    Example:
        >>> to_latex("R&D")
        'R\\\\&D'
        >>> to_latex("87% on-time delivery")
        '87\\\\% on-time delivery'
    """
    if not plaintext_str:
        return ""

    result = plaintext_str

    # Backslash goes first, its replacement introduces braces that must survive
    result = result.replace("\\", "\x00")
    result = result.replace("%", r"\%")
    result = result.replace("$", r"\$")
    result = result.replace("&", r"\&")
    result = result.replace("_", r"\_")
    result = result.replace("#", r"\#")
    result = result.replace("{", r"\{")
    result = result.replace("}", r"\}")
    result = result.replace("~", r"\textasciitilde{}")
    result = result.replace("^", r"\textasciicircum{}")
    result = result.replace("\x00", r"\textbackslash{}")

    return result


def format_latex_environment(
    env_name: str,
    content: str,
    optional_args: List[str] = None,
    mandatory_args: List[str] = None,
) -> str:
    """
    Generate LaTeX environment with arguments.

    Builds: \\begin{env}[opt1][opt2]{arg1}{arg2}
            content
            \\end{env}

    Args:
        env_name: Environment name (e.g., "adjustwidth", "itemize")
        content: Inner content
        optional_args: Optional arguments in [...] (default: None)
        mandatory_args: Mandatory arguments in {...} (default: None)

    Returns:
        Complete LaTeX environment string

    Example:
        >>> format_latex_environment("adjustwidth", "content", mandatory_args=["-1.00em", ""])
        '\\\\begin{adjustwidth}{-1.00em}{}\\ncontent\\n\\\\end{adjustwidth}'
    """
    opening = f"\\begin{{{env_name}}}"

    if optional_args:
        for arg in optional_args:
            opening += f"[{arg}]"

    if mandatory_args:
        for arg in mandatory_args:
            opening += f"{{{arg}}}"

    closing = f"\\end{{{env_name}}}"

    return f"{opening}\n{content}\n{closing}"
