import json

from tabulate import tabulate

from secretvote.share import Reconstruction
from secretvote.utils import to_primitive

FORMATS = ("plain", "table", "json")


def plain(result: Reconstruction) -> str:
    wrong = "[" + ", ".join(str(share) for share in result.wrong_shares) + "]"
    return f"Secret: {result.secret}\nWrong shares: {wrong}"


def table(result: Reconstruction) -> str:
    lines = [
        f"Secret: {result.secret}",
        f"Votes: {result.votes}/{result.subsets}",
    ]
    if result.wrong_shares:
        lines.append(
            tabulate(
                [(s.x, str(s.expected), s.provided) for s in result.wrong_shares],
                ("x", "Expected", "Provided"),
                disable_numparse=True,
            )
        )
    else:
        lines.append("No wrong shares.")
    return "\n".join(lines)


def as_json(result: Reconstruction) -> str:
    return json.dumps(to_primitive(result), sort_keys=True, indent=4)


def render(result: Reconstruction, fmt: str = "plain") -> str:
    assert fmt in FORMATS, f"Unknown format {fmt}"
    return {"plain": plain, "table": table, "json": as_json}[fmt](result)
