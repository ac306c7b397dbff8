"""Image payloads.

| Class                 | Component             |
| --------------------- | --------------------- |
| RawImage              | RawImage              |
| BlendedImage          | ImageRegistViewer     |
| BlendedImageZoomable  | BlenderViewerZoomable |
| ZoomViewer            | ZoomViewer            |

Images carry base64 data URIs (``data:image/png;base64,...``).  Encoding and
resizing happen outside this package; here the URIs are only moved into the
document's ``SharedResources`` by ``add_to_shared_resource`` so that an image
shown several times is serialized once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from websummary.components.catalog import ReactComponent, react_component
from websummary.components.style import Style
from websummary.resources import SharedResources
from websummary.serialize import json_field

__all__ = [
    "BlendedImage",
    "BlendedImageSliderSize",
    "BlendedImageZoomable",
    "ImageProps",
    "ImageZoomPan",
    "MinMax",
    "NumOrStr",
    "RawImage",
    "ZoomViewer",
    "ZoomViewerSize",
]

# A pixel count or a CSS length such as "470px"
NumOrStr = int | str


def _share(store: SharedResources, encoded: str) -> str:
    # Already shared when the extraction pass reaches the same image twice.
    if encoded in store:
        return encoded
    return store.insert(encoded)


@dataclass(frozen=True, slots=True)
class MinMax:
    min: float
    max: float


@dataclass(frozen=True, slots=True)
class ImageZoomPan:
    scale_limits: MinMax

    @classmethod
    def with_scale_limits(cls, min_scale: float, max_scale: float) -> ImageZoomPan:
        """Raises ``ValueError`` unless ``0 < min_scale <= max_scale``."""
        if not 0.0 < min_scale <= max_scale:
            msg = f"Scale limits must satisfy 0 < min <= max, got ({min_scale}, {max_scale})"
            raise ValueError(msg)
        return cls(MinMax(min_scale, max_scale))


@dataclass(slots=True)
class ImageProps:
    """Attributes of the rendered ``<img>`` tag."""

    width: str | None = None
    height: str | None = None
    style: Style = field(default_factory=Style)

    def with_width(self, width: object) -> ImageProps:
        self.width = str(width)
        return self

    def with_height(self, height: object) -> ImageProps:
        self.height = str(height)
        return self

    def container_width(self) -> ImageProps:
        """Set ``width="100%"`` on the img tag."""
        return self.with_width("100%")

    def pixelated(self) -> ImageProps:
        self.style.pixelated()
        return self

    def centered(self) -> ImageProps:
        self.style.centered()
        return self


@react_component("RawImage")
@dataclass(slots=True)
class RawImage(ReactComponent):
    """A single base64-encoded image."""

    encoded_image: str
    zoom_pan: ImageZoomPan | None = None
    props: ImageProps = json_field(flatten=True, default_factory=ImageProps)

    def with_props(self, props: ImageProps) -> RawImage:
        self.props = props
        return self

    def pixelated(self) -> RawImage:
        self.props.pixelated()
        return self

    def zoomable(self, min_scale: float, max_scale: float) -> RawImage:
        self.zoom_pan = ImageZoomPan.with_scale_limits(min_scale, max_scale)
        return self

    def add_to_shared_resource(self, store: SharedResources) -> None:
        self.encoded_image = _share(store, self.encoded_image)


@dataclass(frozen=True, slots=True)
class BlendedImageSliderSize:
    """Width of the opacity slider under a blended image."""

    width: NumOrStr


@react_component("ImageRegistViewer")
@dataclass(slots=True)
class BlendedImage(ReactComponent):
    """Two aligned images stacked with an opacity slider between them.

    Attributes:
        image1:       Base64 image on the left end of the slider.
        image1_title: Optional caption at the left of the slider.
        image2:       Base64 image on the right end of the slider.
        image2_title: Optional caption at the right of the slider.
    """

    image1: str = json_field(rename="imgA")
    image2: str = json_field(rename="imgB")
    size: BlendedImageSliderSize = json_field(rename="sizes")
    image1_title: str | None = json_field(rename="imgATitle", default=None)
    image2_title: str | None = json_field(rename="imgBTitle", default=None)
    plot_title: str | None = None
    slider_title: str | None = None

    def add_to_shared_resource(self, store: SharedResources) -> None:
        self.image1 = _share(store, self.image1)
        self.image2 = _share(store, self.image2)


@react_component("BlenderViewerZoomable")
@dataclass(slots=True)
class BlendedImageZoomable(ReactComponent):
    """A ``BlendedImage`` with zoom and pan controls."""

    blended_image: BlendedImage = json_field(flatten=True)
    zoom_pan: ImageZoomPan
    img_props: ImageProps = field(default_factory=ImageProps)

    @classmethod
    def new(
        cls, blended_image: BlendedImage, min_scale: float, max_scale: float
    ) -> BlendedImageZoomable:
        return cls(
            blended_image=blended_image,
            zoom_pan=ImageZoomPan.with_scale_limits(min_scale, max_scale),
        )

    def add_to_shared_resource(self, store: SharedResources) -> None:
        self.blended_image.add_to_shared_resource(store)


@dataclass(frozen=True, slots=True)
class ZoomViewerSize:
    width: NumOrStr
    height: NumOrStr


@react_component("ZoomViewer")
@dataclass(slots=True)
class ZoomViewer(ReactComponent):
    """A thumbnail that opens a magnified view of a larger image."""

    small_image: str
    big_image: str
    sizes: ZoomViewerSize
    plot_title: str | None = None

    def add_to_shared_resource(self, store: SharedResources) -> None:
        self.small_image = _share(store, self.small_image)
        self.big_image = _share(store, self.big_image)
