"""Canvas abstraction for the widget panel - allows swapping image output with test backends."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont


class PanelCanvas(ABC):
    """Abstract canvas interface for drawing the widget."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Get canvas width in pixels."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Get canvas height in pixels."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the entire canvas (set all pixels to black)."""
        pass

    @abstractmethod
    def fill_rect(self, x: int, y: int, w: int, h: int, r: int, g: int, b: int) -> None:
        """
        Fill a rectangle with the given RGB color.

        Args:
            x: Left edge (0-based)
            y: Top edge (0-based)
            w: Width in pixels
            h: Height in pixels
            r: Red component (0-255)
            g: Green component (0-255)
            b: Blue component (0-255)
        """
        pass

    @abstractmethod
    def draw_text(self, x: int, y: int, text: str, r: int, g: int, b: int) -> None:
        """Draw text with its top-left corner at (x, y)."""
        pass


class FakePanelCanvas(PanelCanvas):
    """
    Fake canvas implementation for testing - records what was drawn.

    Useful for unit tests and development without image output.
    """

    def __init__(self, width: int = 320, height: int = 240):
        self._width = width
        self._height = height
        self.texts: List[Tuple[int, int, str, Tuple[int, int, int]]] = []
        self.rects: List[Tuple[int, int, int, int, Tuple[int, int, int]]] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self.texts = []
        self.rects = []

    def fill_rect(self, x: int, y: int, w: int, h: int, r: int, g: int, b: int) -> None:
        self.rects.append((x, y, w, h, (r, g, b)))

    def draw_text(self, x: int, y: int, text: str, r: int, g: int, b: int) -> None:
        # Anything starting below the bottom edge is not visible
        if y < self._height:
            self.texts.append((x, y, text, (r, g, b)))

    def get_texts(self) -> List[str]:
        """Drawn strings in drawing order (for testing)."""
        return [text for _, _, text, _ in self.texts]

    def contains_text(self, fragment: str) -> bool:
        return any(fragment in text for text in self.get_texts())


class PILCanvas(PanelCanvas):
    """
    PIL-based canvas for rendering to PNG images.

    Useful for previewing the widget or serving it as an image.
    """

    def __init__(
        self,
        width: int = 320,
        height: int = 240,
        scale: int = 1,
        font_path: Optional[str] = None,
        font_size: int = 12
    ):
        """
        Initialize PIL canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            scale: Scale factor for output image
            font_path: TrueType font to use, Pillow's default font if None
            font_size: Font size in pixels (TrueType only)
        """
        self._width = width
        self._height = height
        self._scale = scale
        if font_path:
            self._font = ImageFont.truetype(font_path, font_size)
        else:
            self._font = ImageFont.load_default()
        self._image = Image.new("RGB", (width, height), (0, 0, 0))
        self._draw = ImageDraw.Draw(self._image)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._image = Image.new("RGB", (self._width, self._height), (0, 0, 0))
        self._draw = ImageDraw.Draw(self._image)

    def fill_rect(self, x: int, y: int, w: int, h: int, r: int, g: int, b: int) -> None:
        self._draw.rectangle([x, y, x + w - 1, y + h - 1], fill=(r, g, b))

    def draw_text(self, x: int, y: int, text: str, r: int, g: int, b: int) -> None:
        if not isinstance(self._font, ImageFont.FreeTypeFont):
            # Bitmap fonts only cover Latin-1
            text = text.encode("latin-1", "replace").decode("latin-1")
        self._draw.text((x, y), text, fill=(r, g, b), font=self._font)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Get pixel color at given coordinates (for testing)."""
        return self._image.getpixel((x, y))

    def save(self, filename: str) -> None:
        """
        Save canvas to PNG file.

        Args:
            filename: Output filename (e.g., "clima.png")
        """
        if self._scale > 1:
            scaled = self._image.resize(
                (self._width * self._scale, self._height * self._scale),
                Image.Resampling.NEAREST
            )
            scaled.save(filename)
        else:
            self._image.save(filename)
