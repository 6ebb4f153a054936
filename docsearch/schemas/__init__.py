"""Pydantic schemas for document service responses."""

from docsearch.schemas.get_result import GetResult, Hit, HitsInfo, ShardsInfo

__all__ = ["GetResult", "Hit", "HitsInfo", "ShardsInfo"]
