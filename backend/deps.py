from fastapi import Request

from minirecord import DatabaseEngine


def get_engine(request: Request) -> DatabaseEngine:
    return request.app.state.engine
