class ExplorerError(Exception):
    pass


class DataSourceError(ExplorerError):
    pass


class RateLimitError(DataSourceError):
    pass
