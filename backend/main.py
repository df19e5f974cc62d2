import os

from app_factory import create_app

app = create_app(os.environ.get("MINIRECORD_DB", "minirecord.sqlite"))
