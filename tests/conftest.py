import os
import tempfile

import pytest

# Keep the server's file log out of the working tree
os.environ.setdefault("BLUEBLISS_LOG_FILE", os.path.join(tempfile.gettempdir(), "bluebliss-test.log"))


@pytest.fixture
def triple_delight_cart():
    return [
        {"name": "CHEEZY 7 PIZZA", "price": 229},
        {"name": "PERI PERI PANEER", "price": 209},
        {"name": "PERI PERI PANEER WRAP", "price": 209},
    ]
