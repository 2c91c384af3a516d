"""Domain layer for sheetledger.

Services are imported from their modules directly
(e.g. ``from sheetledger.domain.ingestion import IngestionService``) so that
the database layer can import ``sheetledger.domain.entities`` without a cycle.
"""
