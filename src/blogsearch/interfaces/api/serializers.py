"""JSON shapes returned by the API."""

from blogsearch.application.dto.document_dto import DocumentOutput, IngestResult
from blogsearch.application.dto.search_dto import SearchResult


def document_to_dict(doc: DocumentOutput) -> dict:
    data = {
        "id": str(doc.id),
        "title": doc.title,
        "content": doc.content,
        "createdAt": doc.created_at.isoformat(),
        "updatedAt": doc.updated_at.isoformat(),
    }
    if doc.chunk_count is not None:
        data["chunkCount"] = doc.chunk_count
    return data


def ingest_result_to_dict(result: IngestResult) -> dict:
    return {
        "document": document_to_dict(result.document),
        "chunkCount": result.chunk_count,
    }


def search_result_to_dict(result: SearchResult) -> dict:
    return {
        "documentId": str(result.document_id),
        "title": result.title,
        "content": result.content,
        "matchedChunkText": result.matched_chunk_text,
        "matchedChunkIndex": result.matched_chunk_index,
        "matchedChunkStart": result.matched_chunk_start,
        "matchedChunkEnd": result.matched_chunk_end,
        "similarity": round(result.similarity, 6),
        "createdAt": result.created_at.isoformat(),
        "updatedAt": result.updated_at.isoformat(),
    }
