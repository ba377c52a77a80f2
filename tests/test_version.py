"""Tests for version module."""

from unittest.mock import MagicMock, patch

from shots_organizer.version import UNKNOWN_VERSION, __version__, get_version


class TestVersion:
    """Tests for version lookup."""

    def test_version_constant(self) -> None:
        """Test that version constant is defined."""
        assert isinstance(__version__, str)
        assert len(__version__) > 0

    @patch("shots_organizer.version.metadata.version")
    def test_reads_distribution_metadata(self, mock_version: MagicMock) -> None:
        mock_version.return_value = "1.2.3"

        assert get_version() == "1.2.3"
        mock_version.assert_called_once_with("shots-organizer")

    @patch("shots_organizer.version.metadata.version")
    def test_not_installed(self, mock_version: MagicMock) -> None:
        """Test a source tree without installed metadata."""
        from importlib.metadata import PackageNotFoundError

        mock_version.side_effect = PackageNotFoundError("shots-organizer")

        assert get_version() == UNKNOWN_VERSION
