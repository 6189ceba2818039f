from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageDefinition:
    size: int
    transparent_background: bool
    round_edges: bool
    output_filename_prefix: str

    @property
    def filename(self) -> str:
        return f"{self.output_filename_prefix}-{self.size:03d}.png"


IMAGE_DEFINITIONS: tuple[ImageDefinition, ...] = (
    # iPhone (first generation or 2G), iPhone 3G, iPhone 3GS
    ImageDefinition(57, False, False, "apple-touch-icon"),
    # Windows phone small tile
    ImageDefinition(70, False, False, "windows"),
    # iPad and iPad mini @1x
    ImageDefinition(76, False, False, "apple-touch-icon"),
    # Social media
    ImageDefinition(100, True, False, "favicon"),
    # iPhone 4 retina
    ImageDefinition(114, False, False, "apple-touch-icon"),
    # iPhone 6/7, iPhone 6s/7s, iPhone SE
    ImageDefinition(120, False, False, "apple-touch-icon"),
    # Android regular
    ImageDefinition(128, False, True, "favicon"),
    # iPad retina (iOS 6)
    ImageDefinition(144, False, False, "apple-touch-icon"),
    # Windows phone medium tile
    ImageDefinition(150, False, False, "windows"),
    # iPad / iPad mini
    ImageDefinition(152, False, False, "apple-touch-icon"),
    # iPad Pro
    ImageDefinition(167, False, False, "apple-touch-icon"),
    # iPhone 6/7 Plus, iPhone 6s/7s Plus
    ImageDefinition(180, False, False, "apple-touch-icon"),
    # Android hi-res
    ImageDefinition(192, False, True, "favicon"),
    # Social media
    ImageDefinition(200, True, False, "favicon"),
    # Windows phone large tile
    ImageDefinition(310, False, False, "favicon"),
)


def catalog_sizes() -> list[int]:
    return [definition.size for definition in IMAGE_DEFINITIONS]
