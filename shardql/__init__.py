"""Building blocks of a small distributed SQL query engine: query models, sharding, coordinator and worker state, tracing, a web dashboard and a client library."""

__version__ = "0.1.0"