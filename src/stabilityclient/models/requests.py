"""Request models for StabilityClient."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field


class ClipGuidancePreset(str, Enum):
    """CLIP guidance presets."""

    FAST_BLUE = "FAST_BLUE"
    FAST_GREEN = "FAST_GREEN"
    NONE = "NONE"
    SIMPLE = "SIMPLE"
    SLOW = "SLOW"
    SLOWER = "SLOWER"
    SLOWEST = "SLOWEST"


class Sampler(str, Enum):
    """Samplers for the diffusion process."""

    DDIM = "DDIM"
    DDPM = "DDPM"
    K_DPMPP_2M = "K_DPMPP_2M"
    K_DPMPP_2S_ANCESTRAL = "K_DPMPP_2S_ANCESTRAL"
    K_DPM_2 = "K_DPM_2"
    K_DPM_2_ANCESTRAL = "K_DPM_2_ANCESTRAL"
    K_EULER = "K_EULER"
    K_EULER_ANCESTRAL = "K_EULER_ANCESTRAL"
    K_HEUN = "K_HEUN"
    K_LMS = "K_LMS"


class StylePreset(str, Enum):
    """Style presets (subject to change upstream)."""

    THREE_D_MODEL = "3d-model"
    ANALOG_FILM = "analog-film"
    ANIME = "anime"
    CINEMATIC = "cinematic"
    COMIC_BOOK = "comic-book"
    DIGITAL_ART = "digital-art"
    ENHANCE = "enhance"
    FANTASY_ART = "fantasy-art"
    ISOMETRIC = "isometric"
    LINE_ART = "line-art"
    LOW_POLY = "low-poly"
    MODELING_COMPOUND = "modeling-compound"
    NEON_PUNK = "neon-punk"
    ORIGAMI = "origami"
    PHOTOGRAPHIC = "photographic"
    PIXEL_ART = "pixel-art"
    TILE_TEXTURE = "tile-texture"


class InitImageMode(str, Enum):
    """Whether image_strength or step_schedule_* controls init_image influence."""

    IMAGE_STRENGTH = "IMAGE_STRENGTH"
    STEP_SCHEDULE = "STEP_SCHEDULE"


class MaskSource(str, Enum):
    """Where the inpainting mask is read from."""

    MASK_IMAGE_BLACK = "MASK_IMAGE_BLACK"
    MASK_IMAGE_WHITE = "MASK_IMAGE_WHITE"
    INIT_IMAGE_ALPHA = "INIT_IMAGE_ALPHA"


class TextPrompt(BaseModel):
    """Text prompt for image generation."""

    text: str = Field(..., description="The prompt itself")
    weight: Optional[float] = Field(None, description="Prompt weight (negative values for negative prompts)")


def _coerce_prompt(value: Any) -> Any:
    if isinstance(value, str):
        return {"text": value}
    if isinstance(value, tuple) and len(value) == 2:
        return {"text": value[0], "weight": value[1]}
    return value


def coerce_text_prompts(value: Any) -> Any:
    """Accept a str, a (text, weight) tuple, a TextPrompt, or a list of those."""
    if isinstance(value, (str, tuple, TextPrompt, dict)):
        return [_coerce_prompt(value)]
    if isinstance(value, list):
        return [_coerce_prompt(item) for item in value]
    return value


TextPrompts = Annotated[list[TextPrompt], BeforeValidator(coerce_text_prompts)]

# Shared field constraints
CfgScale = Annotated[Optional[int], Field(ge=0, le=35, description="How strictly diffusion follows the prompt")]
Samples = Annotated[Optional[int], Field(ge=1, le=10, description="Number of images to generate")]
Seed = Annotated[Optional[int], Field(ge=0, le=4294967295, description="Noise seed (0 or omitted = random)")]
Steps = Annotated[Optional[int], Field(ge=10, le=150, description="Number of diffusion steps")]


class TextToImageRequest(BaseModel):
    """Request body for text-to-image generation (sent as JSON)."""

    text_prompts: TextPrompts = Field(..., min_length=1, description="Prompts; use negative weights for negative prompts")
    height: Optional[int] = Field(None, ge=128, multiple_of=64, description="Image height in pixels")
    width: Optional[int] = Field(None, ge=128, multiple_of=64, description="Image width in pixels")
    cfg_scale: CfgScale = None
    clip_guidance_preset: Optional[ClipGuidancePreset] = None
    sampler: Optional[Sampler] = Field(None, description="Omit to let the service choose")
    samples: Samples = None
    seed: Seed = None
    steps: Steps = None
    style_preset: Optional[StylePreset] = None
    extras: Optional[dict[str, Any]] = Field(None, description="Experimental engine parameters")


class ImageToImageRequest(BaseModel):
    """Request body for image-to-image generation (sent as multipart)."""

    text_prompts: TextPrompts = Field(..., min_length=1)
    init_image: Path = Field(..., description="Path of the image used to initialize diffusion")
    init_image_mode: Optional[InitImageMode] = None
    image_strength: Optional[float] = Field(
        None, ge=0.0, le=1.0, description="Influence of init_image; values near 1 stay close to it"
    )
    step_schedule_start: Optional[float] = Field(None, ge=0.0, le=1.0)
    step_schedule_end: Optional[float] = Field(None, ge=0.0, le=1.0)
    cfg_scale: CfgScale = None
    clip_guidance_preset: Optional[ClipGuidancePreset] = None
    sampler: Optional[Sampler] = None
    samples: Samples = None
    seed: Seed = None
    steps: Steps = None
    style_preset: Optional[StylePreset] = None
    extras: Optional[dict[str, Any]] = None


class MaskingRequest(BaseModel):
    """Request body for masked image-to-image generation (sent as multipart)."""

    init_image: Path = Field(..., description="Image used to initialize diffusion")
    mask_source: MaskSource = Field(MaskSource.MASK_IMAGE_BLACK, description="Where the mask comes from")
    mask_image: Optional[Path] = Field(
        None, description="Grayscale mask with the same dimensions as init_image"
    )
    text_prompts: TextPrompts = Field(..., min_length=1)
    cfg_scale: CfgScale = None
    clip_guidance_preset: Optional[ClipGuidancePreset] = None
    sampler: Optional[Sampler] = None
    samples: Samples = None
    seed: Seed = None
    steps: Steps = None
    style_preset: Optional[StylePreset] = None
    extras: Optional[dict[str, Any]] = None


class LatentUpscalerUpscaleRequest(BaseModel):
    """Upscale request for Stable Diffusion latent upscaler engines."""

    image: Path
    text_prompts: Optional[TextPrompts] = None
    height: Optional[int] = Field(None, ge=512, description="Only one of width or height may be set")
    width: Optional[int] = Field(None, ge=512, description="Only one of width or height may be set")
    cfg_scale: CfgScale = None
    seed: Seed = None
    steps: Steps = None


class RealESRGANUpscaleRequest(BaseModel):
    """Upscale request for ESRGAN-based engines."""

    image: Path
    height: Optional[int] = Field(None, ge=512, description="Only one of width or height may be set")
    width: Optional[int] = Field(None, ge=512, description="Only one of width or height may be set")


UpscaleRequest = LatentUpscalerUpscaleRequest | RealESRGANUpscaleRequest
