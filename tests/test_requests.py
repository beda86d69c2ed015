"""Tests for request models and backoff configuration."""

import pytest
from pydantic import ValidationError

from stabilityclient.models.config import BackoffPolicy
from stabilityclient.models.requests import (
    LatentUpscalerUpscaleRequest,
    MaskingRequest,
    MaskSource,
    StylePreset,
    TextPrompt,
    TextToImageRequest,
)


def test_single_string_prompt():
    request = TextToImageRequest(text_prompts="a lighthouse")

    assert request.text_prompts == [TextPrompt(text="a lighthouse")]


def test_weighted_tuple_prompt():
    request = TextToImageRequest(text_prompts=("blurry", -1.0))

    assert request.text_prompts == [TextPrompt(text="blurry", weight=-1.0)]


def test_mixed_prompt_list():
    request = TextToImageRequest(
        text_prompts=["a lighthouse", ("blurry", -1.0), TextPrompt(text="fog", weight=0.5), {"text": "dusk"}]
    )

    assert [(p.text, p.weight) for p in request.text_prompts] == [
        ("a lighthouse", None),
        ("blurry", -1.0),
        ("fog", 0.5),
        ("dusk", None),
    ]


def test_empty_prompt_list_is_rejected():
    with pytest.raises(ValidationError):
        TextToImageRequest(text_prompts=[])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"height": 500},
        {"width": 64},
        {"cfg_scale": 36},
        {"samples": 0},
        {"samples": 11},
        {"steps": 5},
        {"seed": -1},
    ],
)
def test_out_of_range_values_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        TextToImageRequest(text_prompts="a lighthouse", **kwargs)


def test_valid_dimensions_and_style():
    request = TextToImageRequest(text_prompts="a lighthouse", height=1024, width=512, style_preset="3d-model")

    assert request.height == 1024
    assert request.style_preset == StylePreset.THREE_D_MODEL


def test_masking_defaults_to_black_mask(tmp_path):
    request = MaskingRequest(text_prompts="a red door", init_image=tmp_path / "init.png")

    assert request.mask_source == MaskSource.MASK_IMAGE_BLACK
    assert request.mask_image is None


def test_upscale_prompts_are_optional(tmp_path):
    request = LatentUpscalerUpscaleRequest(image=tmp_path / "in.png")

    assert request.text_prompts is None


def test_upscale_minimum_size(tmp_path):
    with pytest.raises(ValidationError):
        LatentUpscalerUpscaleRequest(image=tmp_path / "in.png", width=256)


def test_backoff_intervals_grow_and_cap():
    policy = BackoffPolicy(initial_interval_s=0.5, multiplier=1.5, max_interval_s=1.0)

    assert [policy.compute_interval(n) for n in range(1, 5)] == pytest.approx([0.5, 0.75, 1.0, 1.0])


def test_backoff_interval_index_starts_at_one():
    with pytest.raises(ValueError):
        BackoffPolicy().compute_interval(0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_interval_s": 10.0, "max_interval_s": 1.0},
        {"multiplier": 0.5},
        {"max_attempts": 0},
        {"initial_interval_s": -1.0},
    ],
)
def test_invalid_backoff_policy(kwargs):
    with pytest.raises(ValidationError):
        BackoffPolicy(**kwargs)


def test_backoff_policy_is_frozen():
    policy = BackoffPolicy()

    with pytest.raises(ValidationError):
        policy.multiplier = 3.0
