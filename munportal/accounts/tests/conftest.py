import io

import pytest
from PIL import Image


def make_image_bytes(fmt="PNG", size=(10, 10), mode="RGBA"):
    """Create an in-memory image and return bytes."""
    img = Image.new(mode, size, (255, 0, 0, 128) if "A" in mode else (255, 0, 0))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def signup_data(password):
    def _data(**overrides):
        data = {
            "full_name": "Aruzhan Sadykova",
            "email": "aruzhan@example.com",
            "phone": "+77011234567",
            "role": "participant",
            "verification_code": "",
            "password1": password,
            "password2": password,
        }
        data.update(overrides)
        return data

    return _data
