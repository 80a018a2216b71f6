"""
test_license.py - 선택적 라이선스 파일 테스트
"""

from pathlib import Path

from docbinder.render.license import load_license_file


class TestLoadLicenseFile:
    """load_license_file 테스트."""

    def test_existing_file(self, tmp_path: Path):
        license_path = tmp_path / "docbinder.lic"
        license_path.write_text("licensed", encoding="utf-8")

        assert load_license_file(license_path) is True
        assert load_license_file(str(license_path)) is True

    def test_missing_file(self, tmp_path: Path):
        assert load_license_file(tmp_path / "missing.lic") is False

    def test_directory_is_not_license(self, tmp_path: Path):
        assert load_license_file(tmp_path) is False

    def test_none_and_blank(self):
        assert load_license_file(None) is False
        assert load_license_file("  ") is False
