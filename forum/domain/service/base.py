"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Each service owns one aggregate together with its cache entries and
    index entries. Cascades across aggregates are orchestrated by use cases.
    """

    pass
