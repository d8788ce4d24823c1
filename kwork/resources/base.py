from kwork.types.models import WorkKey, WorkRecord


class WorkStore:
    """Versioned store of work records.

    Implementations enforce optimistic concurrency: ``update_status`` must
    reject a record whose ``resource_version`` is no longer current.
    """

    async def get(self, key: WorkKey) -> WorkRecord:
        """Fetch the current record.

        Raises:
            NotFoundError: if no record exists for ``key``.
        """
        raise NotImplementedError()

    async def update_status(self, record: WorkRecord) -> WorkRecord:
        """Replace the record's status and return it with its new version.

        Raises:
            ConflictError: if ``record.resource_version`` is stale.
        """
        raise NotImplementedError()
