# tests/test_retrieval.py

"""
Retrieval Tests - cosine ranking of report chunks
"""

import numpy as np

from reportpack.chunkers import chunk
from reportpack.models import Chunk, make_chunk_id
from reportpack.protocols import EmbeddingProvider
from reportpack.retrieval import ChunkIndex, cosine_similarity, excerpt

REPORT = (
    "Security\nTwo management token values have not been rotated this year.\n\n"
    "Webhooks\nThree webhook endpoints return errors on every publish event.\n\n"
    "Assets\nLarge asset files are uploaded without any compression applied."
)


def make_chunk(index: int, content: str, section: str = "General") -> Chunk:
    return Chunk(
        id=make_chunk_id(index, 0, content),
        content=content,
        section=section,
        chunk_index=index,
        start_char=0,
        end_char=len(content),
    )


class TestCosineSimilarity:

    def test_zero_rows_score_zero(self):
        matrix = np.array([[1.0, 0.0], [0.0, 0.0], [1.0, 1.0]])
        scores = cosine_similarity(matrix, np.array([1.0, 0.0]))
        assert np.allclose(scores, [1.0, 0.0, 1 / np.sqrt(2)])


class TestExcerpt:

    def test_short_text_is_flattened(self):
        assert excerpt("a\n\nb  c") == "a b c"

    def test_long_text_is_capped(self):
        result = excerpt("word " * 100)
        assert len(result) <= 200
        assert result.endswith("...")


class TestChunkIndex:

    def test_ranks_matching_section_first(self, embedder):
        index = ChunkIndex.build(chunk(REPORT), embedder)
        citations = index.search("security token rotation", limit=2)

        assert len(citations) == 2
        assert citations[0].section == "Security"
        assert citations[0].relevance_score > citations[1].relevance_score

    def test_citation_fields(self, embedder):
        chunks = chunk(REPORT)
        citation = ChunkIndex.build(chunks, embedder).search("webhook", limit=1)[0]

        assert citation.chunk_id == chunks[1].id
        assert citation.section == "Webhooks"
        assert citation.excerpt.startswith("Webhooks")
        assert 0.0 <= citation.relevance_score <= 1.0

    def test_section_filter(self, embedder):
        index = ChunkIndex.build(chunk(REPORT), embedder)
        citations = index.search("security token", section="assets")
        assert [c.section for c in citations] == ["Assets"]

    def test_empty_index_and_queries(self, embedder):
        assert ChunkIndex.build([], embedder).search("anything") == []
        index = ChunkIndex.build([make_chunk(0, "security review of the stack")], embedder)
        assert index.search("   ") == []
        assert index.search("security", limit=0) == []
        assert len(index) == 1

    def test_fake_embedder_satisfies_protocol(self, embedder):
        assert isinstance(embedder, EmbeddingProvider)
