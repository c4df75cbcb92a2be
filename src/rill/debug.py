import json
from enum import Enum
from typing import Any

from rill.tokens import Token


def format_header(label: str, width: int = 80, fill_char: str = "═", color: bool = True) -> str:
    padding = width - len(label) - 4
    header = f"{fill_char} {label} {fill_char * padding}"
    if not color:
        return f"\n{header}"
    bold_white = "\033[1;97m"
    reset = "\033[0m"
    return f"\n{bold_white}{header}{reset}"


def debug_tokens(tokens: list[Token]) -> str:
    lines = []
    for token in tokens:
        value = "" if token.value is None else f" {token.value}"
        lines.append(f"{token.line:>4}  {token.type.name}{value}")
    return "\n".join(lines)


def debug_ast(node: Any, indent: int = 2) -> str:
    def ast_to_dict(n: Any) -> Any:
        if isinstance(n, list):
            return [ast_to_dict(child) for child in n]
        elif hasattr(n, '__dataclass_fields__'):
            # Tag each node with its class so sibling variants stay distinguishable.
            fields = {field: ast_to_dict(getattr(n, field)) for field in n.__dataclass_fields__}
            return {"node": type(n).__name__, **fields}
        elif isinstance(n, Enum):
            return n.name
        else:
            return n

    return json.dumps(ast_to_dict(node), indent=indent)
