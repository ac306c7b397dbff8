"""Tests for the SharedResources store and the extraction pass."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from websummary.components import RawImage
from websummary.resources import RESOURCE_PREFIX, SharedResources, extract_resources

PNG_A = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAgAAAAIAQMAAAD+wSzI"
PNG_B = "data:image/png;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAAB"


class TestInsert:
    """insert() deduplicates by strict structural equality."""

    def test_first_reference(self) -> None:
        store = SharedResources()
        assert store.insert(PNG_A) == "_resources_000"
        assert len(store) == 1

    def test_equal_values_share_a_reference(self) -> None:
        store = SharedResources()
        first = store.insert(PNG_A)
        second = store.insert(PNG_A)
        assert first == second
        assert len(store) == 1

    def test_distinct_values_get_increasing_ids(self) -> None:
        store = SharedResources()
        refs = [store.insert(PNG_A), store.insert(PNG_B), store.insert({"k": [1, 2]})]
        assert refs == ["_resources_000", "_resources_001", "_resources_002"]
        assert len(store) == 3

    def test_structural_equality_for_objects(self) -> None:
        store = SharedResources()
        assert store.insert({"a": [1, {"b": 2}]}) == store.insert({"a": [1, {"b": 2}]})
        assert len(store) == 1

    def test_json_types_must_match(self) -> None:
        """true and 1, or 1 and 1.0, are different values."""
        store = SharedResources()
        refs = {store.insert(True), store.insert(1), store.insert(1.0)}
        assert len(refs) == 3
        assert len(store) == 3

    def test_ids_grow_past_three_digits(self) -> None:
        store = SharedResources()
        for i in range(1001):
            ref = store.insert(i)
        assert ref == RESOURCE_PREFIX + "1000"


class TestLookup:
    def test_get_and_to_json(self) -> None:
        store = SharedResources()
        ref = store.insert(PNG_A)
        assert store.get(ref) == PNG_A
        assert ref in store
        assert store.to_json() == {"000": PNG_A}

    def test_unknown_reference(self) -> None:
        with pytest.raises(KeyError):
            SharedResources().get("_resources_042")

    def test_is_reference(self) -> None:
        assert SharedResources.is_reference("_resources_000")
        assert not SharedResources.is_reference(PNG_A)
        assert not SharedResources.is_reference(7)


class TestExtractResources:
    """extract_resources() walks the tree once and rewrites blobs."""

    def test_nested_images_are_deduplicated(self) -> None:
        @dataclass
        class Content:
            first: RawImage
            images: list[RawImage]
            by_name: dict[str, RawImage]

        content = Content(
            first=RawImage(PNG_A),
            images=[RawImage(PNG_B), RawImage(PNG_A)],
            by_name={"again": RawImage(PNG_B)},
        )
        store = SharedResources()
        extract_resources(content, store)

        assert len(store) == 2
        assert content.first.encoded_image == "_resources_000"
        assert [i.encoded_image for i in content.images] == [
            "_resources_001",
            "_resources_000",
        ]
        assert content.by_name["again"].encoded_image == "_resources_001"

    def test_second_pass_is_a_no_op(self) -> None:
        image = RawImage(PNG_A)
        store = SharedResources()
        extract_resources(image, store)
        extract_resources(image, store)
        assert image.encoded_image == "_resources_000"
        assert len(store) == 1

    def test_scalars_are_ignored(self) -> None:
        store = SharedResources()
        extract_resources(["a", 1, None, 2.5], store)
        assert len(store) == 0
