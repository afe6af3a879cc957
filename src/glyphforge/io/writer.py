"""Font writer for saving compiled fonts.

Compiled fonts leave the assembler as bytes; FontWriter puts them on disk
and verifies that what was written opens as a font.
"""

from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from glyphforge.exceptions import FontSaveError

FONT_SUFFIX = ".ttf"


class FontWriter:
    """Writes compiled font binaries.

    Example:
        writer = FontWriter(Path("build/MyIcons-Regular.ttf"))
        writer.write(font_bytes)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the font writer.

        Args:
            output_path: Path where the font will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, data: bytes, verify: bool = True) -> Path:
        """Write font bytes to the output path, creating parent directories.

        Args:
            data: Compiled font binary
            verify: Re-open the bytes with fontTools before writing

        Returns:
            The path written

        Raises:
            FontSaveError: If the bytes are not a font or cannot be written
        """
        if verify:
            try:
                TTFont(BytesIO(data)).close()
            except (TTLibError, AssertionError, ValueError) as e:
                raise FontSaveError(str(self._output_path), f"not a valid font: {e}") from e

        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_bytes(data)
        except OSError as e:
            raise FontSaveError(str(self._output_path), str(e)) from e

        return self._output_path

    @staticmethod
    def get_output_path(directory: Path, family_name: str, style_name: str = "Regular") -> Path:
        """Default file name for a family: ``<Family>-<Style>.ttf``.

        Converts: ("My Icons", "Regular") -> My-Icons-Regular.ttf
        """
        family = "-".join(family_name.split()) or "Untitled"
        style = "".join(style_name.split()) or "Regular"
        return directory / f"{family}-{style}{FONT_SUFFIX}"
