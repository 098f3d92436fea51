from support import gauge, queue  # noqa: F401
