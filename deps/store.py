from fastapi import Request

from bank import QuestionStore


def get_store(request: Request) -> QuestionStore:
    # one store per app, built in create_app()
    return request.app.state.store
