"""PE link fixer built on pefile."""

import os
import shutil
from pathlib import Path

import pefile

from ..config.models import PatcherSettings
from ..utils.encoding import to_native_path
from ..utils.logging import get_logger
from .base import PatchResult

logger = get_logger(__name__)

# Optional header fields written by the linker, grouped as (major, minor)
VERSION_FIELDS = {
    "os": ("MajorOperatingSystemVersion", "MinorOperatingSystemVersion"),
    "subsystem": ("MajorSubsystemVersion", "MinorSubsystemVersion"),
}


class PELinkFixer:
    """
    Rewrites the linker version fields of a PE image so it loads on older
    Windows releases, then refreshes the image checksum.

    Implements the ``Patcher`` protocol. Every failure is reported through
    ``get_error_string``; nothing is raised to the caller.
    """

    def __init__(self, settings: PatcherSettings | None = None):
        """
        Initialize the fixer.

        Args:
            settings: Target versions and write options; defaults if None
        """
        self.settings = settings or PatcherSettings()
        self.last_result: PatchResult | None = None
        self._error = ""

    def process(self, path: str) -> bool:
        """
        Fix one file in place.

        Args:
            path: File to patch

        Returns:
            True on success, False otherwise
        """
        self._error = ""
        result = self.fix(path)
        self.last_result = result
        if not result.success:
            self._error = result.error_message or "unknown error"
        return result.success

    def get_error_string(self) -> str:
        return self._error

    def fix(self, path: str) -> PatchResult:
        """Patch ``path`` and describe what happened."""
        native = to_native_path(path)
        result = PatchResult(path=path, success=False)

        try:
            with open(native, "rb") as f:
                data = f.read()
        except OSError as e:
            result.error_message = f"cannot read file: {e.strerror or e}"
            return result

        try:
            pe = pefile.PE(data=data, fast_load=True)
        except pefile.PEFormatError as e:
            result.error_message = f"not a valid PE file: {e.value}"
            return result

        try:
            result.changes = self._lower_versions(pe)
            if self.settings.update_checksum:
                checksum = pe.generate_checksum()
                if checksum != pe.OPTIONAL_HEADER.CheckSum:
                    result.changes.append(
                        f"CheckSum 0x{pe.OPTIONAL_HEADER.CheckSum:08x} -> 0x{checksum:08x}"
                    )
                    pe.OPTIONAL_HEADER.CheckSum = checksum
            patched = pe.write()
        except pefile.PEFormatError as e:
            result.error_message = f"malformed PE headers: {e.value}"
            return result
        finally:
            pe.close()

        if not result.changes:
            logger.info(f"Nothing to change in {path}")
            result.success = True
            return result

        try:
            if self.settings.create_backup:
                result.backup_path = self._backup(native)
            self._atomic_write(Path(native), bytes(patched))
        except OSError as e:
            result.error_message = f"cannot write file: {e.strerror or e}"
            return result

        logger.info(f"Patched {path}: {', '.join(result.changes)}")
        result.success = True
        return result

    def _lower_versions(self, pe: pefile.PE) -> list[str]:
        """Clamp version fields to the configured targets."""
        header = pe.OPTIONAL_HEADER
        targets = {
            "os": self.settings.os_version,
            "subsystem": self.settings.subsystem_version,
        }
        changes = []
        for key, (major_field, minor_field) in VERSION_FIELDS.items():
            current = (getattr(header, major_field), getattr(header, minor_field))
            target = targets[key]
            if current > target:
                setattr(header, major_field, target[0])
                setattr(header, minor_field, target[1])
                changes.append(f"{key} version {current[0]}.{current[1]} -> {target[0]}.{target[1]}")
        return changes

    def _backup(self, native: str) -> str:
        backup = native + self.settings.backup_suffix
        shutil.copy2(native, backup)
        return backup

    @staticmethod
    def _atomic_write(path: Path, data: bytes) -> None:
        # Temp file next to the target, then replace
        tmp = path.with_name(path.name + f".winpefix_tmp_{os.getpid()}")
        try:
            with open(tmp, "wb") as f:
                f.write(data)
            shutil.copymode(path, tmp)
            os.replace(tmp, path)
        finally:
            if tmp.exists():
                tmp.unlink()
