"""
Podfile Hook Rewriting.

This module turns plugin hook blocks into standalone Ruby functions and
maintains the single hook aggregate that calls them.

Key features:
- Deterministic, collision-resistant function names per plugin
- Rewriting of `<hook> do |param|` openings into `def` lines
- Appending/removing aggregate call lines per plugin
"""

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

POST_INSTALL_HOOK_NAME = "post_install"
INSTALLER_BLOCK_PARAMETER_NAME = "installer"


@dataclass(frozen=True)
class HookFunction:
    """
    A hook block rewritten into a standalone function.

    Attributes:
        name: Generated function name
        parameter: Block parameter name, or None if the block took none
    """

    name: str
    parameter: str | None = None


@dataclass
class HookExtraction:
    """Result of extracting hook blocks from a fragment."""

    text: str
    functions: list[HookFunction] = field(default_factory=list)


def sanitize_owner(owner: str) -> str:
    """
    Make a plugin name safe for use inside a Ruby identifier.

    `_` is widened to `___` before other symbols become `_`, so
    `my-hook` and `my_hook` produce different names. `my---hook` still
    clashes with `my_hook`.

    Args:
        owner: Plugin name

    Returns:
        Sanitized name
    """
    return re.sub(r"[^A-Za-z0-9_]", "_", owner.replace("_", "___"))


def hook_basic_function_name(hook_name: str, owner: str) -> str:
    """Common prefix of all functions generated for a plugin's hook."""
    return f"{hook_name}{sanitize_owner(owner)}"


def extract_hooks(hook_name: str, text: str, owner: str) -> HookExtraction:
    """
    Rewrite every `<hook_name> do` opening in a fragment into a function definition.

    Only the opening line is rewritten; the block body and its closing `end`
    become the function body as-is.

    Args:
        hook_name: Hook to look for (e.g. "post_install")
        text: Fragment text
        owner: Plugin name the fragment belongs to

    Returns:
        HookExtraction with the rewritten text and generated functions
    """
    pattern = re.compile(rf"{re.escape(hook_name)} do *(\|(\w+)\|)?")
    basic_name = hook_basic_function_name(hook_name, owner)
    functions: list[HookFunction] = []

    def _replace(match: re.Match) -> str:
        name = f"{basic_name}_{len(functions)}"
        parameter = match.group(2)
        functions.append(HookFunction(name=name, parameter=parameter))
        if parameter:
            return f"def {name}({parameter})"
        return f"def {name}"

    rewritten = pattern.sub(_replace, text)

    if not functions and hook_name in text:
        logger.debug(
            "No '%s do' block found for %s, hook is not wired", hook_name, owner
        )

    return HookExtraction(text=rewritten, functions=functions)


def hook_header(hook_name: str, parameter: str) -> str:
    return f"{hook_name} do |{parameter}|\n"


def render_hook_calls(functions: list[HookFunction], parameter: str) -> str:
    """
    Render aggregate call lines for hook functions.

    Functions that declared a block parameter are called with the
    aggregate's own parameter.
    """
    lines = []
    for function in functions:
        call = function.name
        if function.parameter:
            call = f"{call} {parameter}"
        lines.append(f"  {call}\n")
    return "".join(lines)


def add_hook_calls(
    hook_name: str, parameter: str, functions: list[HookFunction], text: str
) -> str:
    """
    Add call lines for functions to the hook aggregate in text.

    New calls go after the existing ones. If there is no aggregate yet, one
    is appended at the end of text.

    Args:
        hook_name: Hook name of the aggregate
        parameter: Aggregate block parameter
        functions: Functions to call
        text: Podfile content without the target header/footer

    Returns:
        Updated content
    """
    calls = render_hook_calls(functions, parameter)
    if not calls:
        return text

    header = hook_header(hook_name, parameter)
    # Header followed by the indented call lines already present
    aggregate = re.compile(rf"{re.escape(header)}(?:[ \t]+\S[^\n]*\n)*")
    match = aggregate.search(text)
    if match:
        return text[: match.end()] + calls + text[match.end() :]

    if text:
        text += "\n\n"
    return f"{text}{header}{calls}end"


def remove_hook_calls(hook_name: str, owner: str, text: str) -> str:
    """
    Remove every line that calls one of owner's generated hook functions.

    Lines are matched by the name scheme rather than exact names, so calls
    left behind by older versions of the fragment go too.
    """
    basic_name = re.escape(hook_basic_function_name(hook_name, owner))
    pattern = re.compile(rf"^.*?\b{basic_name}_\d+\b.*?$\r?\n?", re.MULTILINE)
    return pattern.sub("", text)


def remove_empty_aggregate(hook_name: str, parameter: str, text: str) -> str:
    """Remove a hook aggregate that has no call lines left, with the blank lines before it."""
    header = re.escape(hook_header(hook_name, parameter))
    return re.sub(rf"\n*^{header}end[ \t]*$", "", text, count=1, flags=re.MULTILINE)
