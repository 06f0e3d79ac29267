"""Infrastructure Layer - database engine, query compilation and logging setup."""
