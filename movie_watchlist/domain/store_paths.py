"""Document store paths for saved movies (schema-in-code).

The document store has no DDL or migrations. Collections are created automatically
when the first document is written. Use these helpers so paths stay
consistent and act as the single source of truth for the "schema".

Example:
    path = movie_document_path(uid, "603")
    await store.write_merge(path, {...})
"""

COLLECTION_USERS = "users"
SUBCOLLECTION_MOVIES = "movies"


def user_movies_path(user_id: str) -> str:
    """users/{userId}/movies"""
    return f"{COLLECTION_USERS}/{user_id}/{SUBCOLLECTION_MOVIES}"


def movie_document_path(user_id: str, movie_id: str) -> str:
    """users/{userId}/movies/{externalId}"""
    return f"{user_movies_path(user_id)}/{movie_id}"
