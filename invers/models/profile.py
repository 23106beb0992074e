"""Profile and theme preference models."""

import base64
from typing import Optional
from pydantic import BaseModel, Field, field_validator

DEFAULT_PROFILE_NAME = "Bit ◦ Gold"

# Profile images larger than this are rejected
MAX_IMAGE_BYTES = 500_000

THEME_COLORS = ("green", "pink")


class ImageTooLargeError(ValueError):
    """Raised when a profile image exceeds MAX_IMAGE_BYTES."""

    def __init__(self, size: int):
        super().__init__(
            f"Image is too large ({size:,} bytes). "
            f"Please select an image under {MAX_IMAGE_BYTES // 1000}KB."
        )
        self.size = size


class Profile(BaseModel):
    """Portfolio owner display profile."""

    name: str = Field(default=DEFAULT_PROFILE_NAME, description="Display name")
    image: Optional[str] = Field(
        default=None, description="Profile image as a base64 data URL"
    )

    model_config = {"frozen": True}

    def with_image(self, payload: bytes, mime_type: str = "image/png") -> "Profile":
        """Return a copy carrying the encoded image.

        Args:
            payload: Raw image bytes.
            mime_type: MIME type recorded in the data URL.

        Returns:
            New Profile with the image set.

        Raises:
            ImageTooLargeError: If the payload exceeds MAX_IMAGE_BYTES.
        """
        if len(payload) > MAX_IMAGE_BYTES:
            raise ImageTooLargeError(len(payload))
        encoded = base64.b64encode(payload).decode("ascii")
        return self.model_copy(update={"image": f"data:{mime_type};base64,{encoded}"})


class ThemePreference(BaseModel):
    """Dark mode flag and accent color."""

    dark: bool = Field(default=False, description="Dark mode enabled")
    color_key: str = Field(
        default="green", alias="colorKey", description="Accent color key"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("color_key", mode="before")
    @classmethod
    def _known_color(cls, value):
        return value if value in THEME_COLORS else "green"
