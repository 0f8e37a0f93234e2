"""
Project Store for GCB Sizing Studies

Saves and restores study inputs under a project name. Each project is
one JSON document in the store directory; only inputs are persisted,
results are always recomputed on load.
"""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field

from gcb_sizing.equipment.specs import (
    GeneratorSpec, TransformerSpec, UatSpec, SystemSpec, UAT_10MVA_4_16KV,
)
from gcb_sizing.faults.solver import NOMINAL_FREQUENCY_HZ
from gcb_sizing.sizing_study import SizingConfig

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROJECT_FILE_PREFIX = "gcb_proj_"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SavedProject(BaseModel):
    """Persisted study inputs."""

    model_config = ConfigDict(frozen=True)

    name: str
    generator: GeneratorSpec
    gsu: TransformerSpec
    # Saves made before the UAT inputs existed have no uat entry
    uat: UatSpec = UAT_10MVA_4_16KV
    system: SystemSpec
    contact_parting_time_ms: float
    margin_pct: float
    frequency_hz: float = NOMINAL_FREQUENCY_HZ
    saved_at: datetime = Field(default_factory=_utc_now)

    @classmethod
    def from_config(cls, config: SizingConfig) -> "SavedProject":
        return cls(
            name=config.name,
            generator=config.generator,
            gsu=config.gsu,
            uat=config.uat,
            system=config.system,
            contact_parting_time_ms=config.contact_parting_time_ms,
            margin_pct=config.margin_pct,
            frequency_hz=config.frequency_hz,
        )

    def to_config(self, name: Optional[str] = None) -> SizingConfig:
        return SizingConfig(
            name=name if name is not None else self.name,
            generator=self.generator,
            gsu=self.gsu,
            uat=self.uat,
            system=self.system,
            contact_parting_time_ms=self.contact_parting_time_ms,
            margin_pct=self.margin_pct,
            frequency_hz=self.frequency_hz,
        )


class ProjectStore:
    """Keyed store of saved GCB sizing projects"""

    def __init__(self, directory: str = "data/projects"):
        """
        Initialize project store

        Args:
            directory: Directory holding the project files
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def project_key(name: str) -> str:
        """
        File-safe key for a project name

        Args:
            name: Project name

        Returns:
            Lower-case key with non-alphanumerics replaced by underscores.
            Surrounding whitespace is ignored; the saved name keeps it.
        """
        if not name or not name.strip():
            raise ValueError("Project name must not be empty")
        return re.sub(r"[^a-z0-9]", "_", name.strip().lower())

    def _path(self, name: str) -> Path:
        return self.directory / f"{PROJECT_FILE_PREFIX}{self.project_key(name)}.json"

    def save(self, config: SizingConfig) -> Path:
        """
        Save study inputs under the config's project name

        Args:
            config: Study configuration to persist

        Returns:
            Path of the written project file
        """
        path = self._path(config.name)
        if path.exists():
            existing = self._read(path)
            if existing.name != config.name:
                raise ValueError(
                    f"Project name '{config.name}' collides with saved project "
                    f"'{existing.name}'"
                )

        project = SavedProject.from_config(config)
        path.write_text(project.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Project '{project.name}' saved to: {path}")
        return path

    def load_project(self, name: str) -> SavedProject:
        """
        Load the saved record for a project

        Args:
            name: Project name

        Returns:
            SavedProject record
        """
        path = self._path(name)
        if not path.exists():
            raise FileNotFoundError(f"No saved project named '{name}' in {self.directory}")

        logger.info(f"Loading project '{name}' from: {path}")
        return self._read(path)

    def load(self, name: str) -> SizingConfig:
        """
        Restore study inputs for a project

        Args:
            name: Project name

        Returns:
            SizingConfig with the saved inputs
        """
        return self.load_project(name).to_config()

    def list_projects(self) -> List[str]:
        """Saved project names, sorted"""
        names = []
        for path in self.directory.glob(f"{PROJECT_FILE_PREFIX}*.json"):
            names.append(self._read(path).name)
        return sorted(names)

    def exists(self, name: str) -> bool:
        return self._path(name).exists()

    def delete(self, name: str) -> None:
        """
        Delete a saved project

        Args:
            name: Project name
        """
        path = self._path(name)
        if not path.exists():
            raise FileNotFoundError(f"No saved project named '{name}' in {self.directory}")
        path.unlink()
        logger.info(f"Project '{name}' deleted")

    @staticmethod
    def _read(path: Path) -> SavedProject:
        return SavedProject.model_validate_json(path.read_text(encoding="utf-8"))
