class RepositoryError(ValueError):
    """A precondition on the registry failed; the user can fix it and retry."""


class RepositoryExistsError(RepositoryError):
    pass


class RepositoryNotFoundError(RepositoryError):
    pass


class InvalidRepositoryNameError(RepositoryError):
    pass


class RepositoryInitError(RuntimeError):
    """Creating the bare repository itself failed."""
