"""Tests for the PE link fixer."""

import struct

import pefile
import pytest

from winpefix.config import PatcherSettings
from winpefix.patcher import Patcher, PELinkFixer


def build_pe(os_version=(6, 0), subsystem_version=(6, 0), checksum=0) -> bytes:
    """Build a minimal PE32 image with one code section."""
    dos_header = b"MZ" + b"\0" * 58 + struct.pack("<I", 0x40)

    file_header = struct.pack("<HHIIIHH", 0x14C, 1, 0, 0, 0, 0xE0, 0x0102)

    optional_header = struct.pack(
        "<HBBIIIIIIIIIHHHHHHIIIIHHIIIIII",
        0x10B,  # Magic
        2, 30,  # Linker version
        0x200, 0, 0,  # Code / data sizes
        0x1000,  # AddressOfEntryPoint
        0x1000,  # BaseOfCode
        0x2000,  # BaseOfData
        0x400000,  # ImageBase
        0x1000, 0x200,  # Section / file alignment
        os_version[0], os_version[1],
        0, 0,  # Image version
        subsystem_version[0], subsystem_version[1],
        0,  # Win32VersionValue
        0x2000,  # SizeOfImage
        0x200,  # SizeOfHeaders
        checksum,
        3,  # Console subsystem
        0,  # DllCharacteristics
        0x100000, 0x1000, 0x100000, 0x1000,
        0,  # LoaderFlags
        16,  # NumberOfRvaAndSizes
    ) + b"\0" * (16 * 8)

    section = struct.pack(
        "<8sIIIIIIHHI", b".text", 0x200, 0x1000, 0x200, 0x200, 0, 0, 0, 0, 0x60000020
    )

    headers = dos_header + b"PE\0\0" + file_header + optional_header + section
    headers += b"\0" * (0x200 - len(headers))
    body = b"\xc3" + b"\0" * 0x1FF
    return headers + body


class TestPELinkFixer:
    """Tests for PELinkFixer."""

    @pytest.fixture
    def fixer(self):
        return PELinkFixer()

    @pytest.fixture
    def exe(self, tmp_path):
        path = tmp_path / "app.exe"
        path.write_bytes(build_pe())
        return path

    def test_implements_patcher(self, fixer):
        """Test the fixer satisfies the Patcher protocol."""
        assert isinstance(fixer, Patcher)

    def test_lowers_versions(self, fixer, exe):
        """Test version fields above the target are lowered."""
        assert fixer.process(str(exe))

        pe = pefile.PE(str(exe))
        try:
            assert pe.OPTIONAL_HEADER.MajorOperatingSystemVersion == 5
            assert pe.OPTIONAL_HEADER.MinorOperatingSystemVersion == 1
            assert pe.OPTIONAL_HEADER.MajorSubsystemVersion == 5
            assert pe.OPTIONAL_HEADER.MinorSubsystemVersion == 1
            assert pe.OPTIONAL_HEADER.CheckSum == pe.generate_checksum()
        finally:
            pe.close()

        assert fixer.last_result.modified
        assert any("os version 6.0 -> 5.1" in c for c in fixer.last_result.changes)

    def test_second_run_changes_nothing(self, fixer, exe):
        """Test an already fixed file is left as is."""
        fixer.process(str(exe))
        patched = exe.read_bytes()

        assert fixer.process(str(exe))

        assert not fixer.last_result.modified
        assert exe.read_bytes() == patched

    def test_low_versions_untouched(self, exe):
        """Test versions at or below the target are not raised."""
        exe.write_bytes(build_pe(os_version=(4, 0), subsystem_version=(5, 1)))
        original = exe.read_bytes()
        fixer = PELinkFixer(PatcherSettings(update_checksum=False))

        assert fixer.process(str(exe))

        assert exe.read_bytes() == original

    def test_backup_created(self, exe):
        """Test the original image is kept when backups are enabled."""
        original = exe.read_bytes()
        fixer = PELinkFixer(PatcherSettings(create_backup=True))

        assert fixer.process(str(exe))

        backup = exe.with_name("app.exe.bak")
        assert backup.read_bytes() == original
        assert fixer.last_result.backup_path == str(backup)
        assert exe.read_bytes() != original

    def test_no_temp_files_left(self, fixer, exe):
        """Test the atomic write cleans up after itself."""
        fixer.process(str(exe))
        assert sorted(p.name for p in exe.parent.iterdir()) == ["app.exe"]

    def test_not_a_pe_file(self, fixer, tmp_path):
        """Test a non-PE file fails with a message."""
        path = tmp_path / "notes.txt"
        path.write_text("just some text, definitely not an executable")

        assert not fixer.process(str(path))
        assert fixer.get_error_string().startswith("not a valid PE file")

    def test_missing_file(self, fixer, tmp_path):
        """Test a missing file fails with a message."""
        assert not fixer.process(str(tmp_path / "gone.exe"))
        assert fixer.get_error_string().startswith("cannot read file")

    def test_error_reset_after_success(self, fixer, exe, tmp_path):
        """Test the error string belongs to the latest attempt."""
        fixer.process(str(tmp_path / "gone.exe"))
        assert fixer.process(str(exe))
        assert fixer.get_error_string() == ""
