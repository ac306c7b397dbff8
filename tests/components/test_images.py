"""Tests for image payloads and their shared-resource extraction."""

from __future__ import annotations

import pytest

from websummary.components import (
    BlendedImage,
    BlendedImageSliderSize,
    BlendedImageZoomable,
    ImageProps,
    ImageZoomPan,
    RawImage,
    Style,
    ZoomViewer,
    ZoomViewerSize,
)
from websummary.resources import SharedResources
from websummary.serialize import to_json

PNG = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAgAAAAIAQMAAAD+wSzI"
JPG = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQgH"


class TestRawImage:
    def test_props_are_flattened(self) -> None:
        image = RawImage(PNG).with_props(ImageProps().container_width())
        assert to_json(image) == {
            "encoded_image": PNG,
            "zoom_pan": None,
            "width": "100%",
            "height": None,
            "style": {},
        }

    def test_pixelated_sets_style(self) -> None:
        image = RawImage(PNG).pixelated()
        assert to_json(image)["style"] == {"image-rendering": "pixelated"}  # type: ignore[index]

    def test_zoomable(self) -> None:
        image = RawImage(PNG).zoomable(0.5, 4.0)
        assert to_json(image)["zoom_pan"] == {"scale_limits": {"min": 0.5, "max": 4.0}}  # type: ignore[index]

    @pytest.mark.parametrize(("lo", "hi"), [(0.0, 1.0), (2.0, 1.0), (-1.0, 1.0)])
    def test_invalid_scale_limits(self, lo: float, hi: float) -> None:
        with pytest.raises(ValueError, match="0 < min <= max"):
            ImageZoomPan.with_scale_limits(lo, hi)

    def test_add_to_shared_resource(self) -> None:
        store = SharedResources()
        image = RawImage(PNG)
        image.add_to_shared_resource(store)
        assert image.encoded_image == "_resources_000"
        assert store.get("_resources_000") == PNG


class TestStyle:
    def test_centered(self) -> None:
        assert Style().centered().to_json() == {
            "display": "block",
            "margin-left": "auto",
            "margin-right": "auto",
        }

    def test_equality(self) -> None:
        assert Style().width("10px") == Style({"width": "10px"})
        assert Style().is_empty()


class TestBlendedImage:
    def _blended(self) -> BlendedImage:
        return BlendedImage(
            image1=PNG,
            image2=JPG,
            size=BlendedImageSliderSize(width="470px"),
            image1_title="H&E",
        )

    def test_json_names(self) -> None:
        assert to_json(self._blended()) == {
            "imgA": PNG,
            "imgB": JPG,
            "sizes": {"width": "470px"},
            "imgATitle": "H&E",
            "imgBTitle": None,
            "plot_title": None,
            "slider_title": None,
        }

    def test_both_images_are_shared(self) -> None:
        store = SharedResources()
        blended = self._blended()
        blended.add_to_shared_resource(store)
        assert (blended.image1, blended.image2) == ("_resources_000", "_resources_001")

    def test_zoomable_flattens_the_blended_image(self) -> None:
        zoomable = BlendedImageZoomable.new(self._blended(), 1.0, 8.0)
        encoded = to_json(zoomable)
        assert encoded["imgA"] == PNG  # type: ignore[index]
        assert encoded["zoom_pan"] == {"scale_limits": {"min": 1.0, "max": 8.0}}  # type: ignore[index]

        store = SharedResources()
        zoomable.add_to_shared_resource(store)
        assert to_json(zoomable)["imgB"] == "_resources_001"  # type: ignore[index]

    def test_zoomable_template(self) -> None:
        zoomable = BlendedImageZoomable.new(self._blended(), 1.0, 8.0)
        assert zoomable.template("img") == (
            '<div data-key="img" data-component="BlenderViewerZoomable"></div>'
        )


class TestZoomViewer:
    def test_same_image_twice_is_stored_once(self) -> None:
        viewer = ZoomViewer(PNG, PNG, ZoomViewerSize(300, 300))
        store = SharedResources()
        viewer.add_to_shared_resource(store)
        assert viewer.small_image == viewer.big_image == "_resources_000"
        assert len(store) == 1
