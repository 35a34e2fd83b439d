# helpdesk/core/dependencies.py
from fastapi import Request

from helpdesk.storage.base import Storage


# Common storage dependency; the instance is attached by create_app()
def get_storage(request: Request) -> Storage:
    return request.app.state.storage
