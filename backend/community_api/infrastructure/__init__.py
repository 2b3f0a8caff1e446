"""Infrastructure Layer: database sessions, repositories, crypto, ids, logging."""
