import json
from dataclasses import dataclass
from pathlib import Path

from secretvote.utils import dataclass_to_dict


@dataclass
class ReconstructionCfg:
    # Number of worker processes for the tally pass, 1 keeps it in process.
    workers: int = 1
    chunk_size: int = 4096

    def __post_init__(self: "ReconstructionCfg") -> None:
        assert self.workers >= 1, f"{self.workers=} must be at least 1"
        assert self.chunk_size >= 1, f"{self.chunk_size=} must be at least 1"

    @staticmethod
    def from_json(raw: str) -> "ReconstructionCfg":
        data = json.loads(raw)
        defaults = ReconstructionCfg()
        return ReconstructionCfg(
            workers=int(data.get("workers", defaults.workers)),
            chunk_size=int(data.get("chunk_size", defaults.chunk_size)),
        )

    @staticmethod
    def load(path: Path) -> "ReconstructionCfg":
        with path.open(encoding="utf-8") as fd:
            return ReconstructionCfg.from_json(fd.read())

    def to_json(self: "ReconstructionCfg") -> str:
        return json.dumps(dataclass_to_dict(self), sort_keys=True)

    @property
    def parallel(self: "ReconstructionCfg") -> bool:
        return self.workers > 1
