"""Cosmos DB NoSQL quickstart: CRUD and query walkthrough over family documents."""

__version__ = "0.1.0"
