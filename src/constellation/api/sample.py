"""Bundled sample vocabulary graph for local development.

English words paired with their Korean translations, plus a few
associations between them. Connection weights count how many sentences
two words share.
"""

from dataclasses import dataclass

from constellation.models import GraphEdge, GraphNode, GraphPayload


@dataclass(frozen=True)
class SampleWord:
    word_id: int
    word: str
    frequency: int
    meaning: str | None = None


@dataclass(frozen=True)
class WordConnection:
    word1_id: int
    word2_id: int
    weight: int


SAMPLE_WORDS: tuple[SampleWord, ...] = (
    SampleWord(1, "love", 10, "사랑, 애정"),
    SampleWord(2, "emotion", 8, "감정, 정서"),
    SampleWord(3, "happiness", 7, "행복, 기쁨"),
    SampleWord(4, "freedom", 6, "자유"),
    SampleWord(5, "beautiful", 9, "아름다운"),
    SampleWord(6, "사랑", 12),
    SampleWord(7, "감정", 8),
    SampleWord(8, "행복", 10),
    SampleWord(9, "자유", 7),
    SampleWord(10, "아름다움", 6),
)

SAMPLE_CONNECTIONS: tuple[WordConnection, ...] = (
    WordConnection(1, 6, 8),  # love - 사랑
    WordConnection(2, 7, 7),  # emotion - 감정
    WordConnection(3, 8, 9),  # happiness - 행복
    WordConnection(4, 9, 6),  # freedom - 자유
    WordConnection(5, 10, 5),  # beautiful - 아름다움
    WordConnection(1, 2, 6),  # love - emotion
    WordConnection(1, 3, 7),  # love - happiness
    WordConnection(6, 7, 5),  # 사랑 - 감정
    WordConnection(6, 8, 8),  # 사랑 - 행복
    WordConnection(8, 9, 4),  # 행복 - 자유
)


def build_sample_graph(limit: int = 50, min_weight: int = 2) -> GraphPayload:
    """
    Build the sample graph.

    Args:
        limit: Maximum number of connections
        min_weight: Minimum connection weight to keep

    Returns:
        Graph containing the kept connections and only the words they touch
    """
    connections = [c for c in SAMPLE_CONNECTIONS if c.weight >= min_weight][:limit]
    connected = {c.word1_id for c in connections} | {c.word2_id for c in connections}

    nodes = [
        GraphNode(
            id=str(w.word_id),
            label=w.word,
            kind="word",
            review_count=0,
            meaning=w.meaning,
        )
        for w in SAMPLE_WORDS
        if w.word_id in connected
    ]
    edges = [GraphEdge(source=str(c.word1_id), target=str(c.word2_id)) for c in connections]
    return GraphPayload(nodes=nodes, edges=edges)
