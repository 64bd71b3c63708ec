"""
Object Codec - deterministic binary encoding of stored objects

Wire format (all integers little-endian):
- vertex:   u64 vertex id (8 bytes)
- edge:     from hash (32 bytes) + to hash (32 bytes)
- manifest: u64 element count + count * 32 hash bytes
- root:     vertex manifest hash (32 bytes) + edge manifest hash (32 bytes)

Decoders only check shape (length, truncation). Whether a well-shaped value
is the right one is guaranteed by content addressing, not here.
"""

import struct
from typing import List, Sequence

from ..graph.directed_graph import VertexId
from .content_hash import ContentHash
from .errors import MalformedObject
from .models import HashEdge, GraphHash

U64 = struct.Struct("<Q")
HASH_SIZE = ContentHash.SIZE

VERTEX_SIZE = U64.size
HASH_EDGE_SIZE = 2 * HASH_SIZE
ROOT_SIZE = 2 * HASH_SIZE


def _expect_length(kind: str, data: bytes, size: int) -> None:
    if len(data) < size:
        raise MalformedObject(kind, f"truncated: expected {size} bytes, got {len(data)}")
    if len(data) > size:
        raise MalformedObject(kind, f"trailing data: expected {size} bytes, got {len(data)}")


def encode_vertex(vertex_id: int) -> bytes:
    return U64.pack(VertexId(vertex_id))


def decode_vertex(data: bytes) -> VertexId:
    _expect_length("vertex", data, VERTEX_SIZE)
    return VertexId(U64.unpack(data)[0])


def encode_hash_edge(edge: HashEdge) -> bytes:
    return edge.from_hash.digest + edge.to_hash.digest


def decode_hash_edge(data: bytes) -> HashEdge:
    _expect_length("edge", data, HASH_EDGE_SIZE)
    return HashEdge(
        from_hash=ContentHash(data[:HASH_SIZE]),
        to_hash=ContentHash(data[HASH_SIZE:]),
    )


def encode_manifest(hashes: Sequence[ContentHash]) -> bytes:
    """Encode an ordered hash list. Order is part of the encoding."""
    return U64.pack(len(hashes)) + b"".join(h.digest for h in hashes)


def decode_manifest(data: bytes) -> List[ContentHash]:
    if len(data) < U64.size:
        raise MalformedObject("manifest", f"truncated: missing length prefix ({len(data)} bytes)")
    (count,) = U64.unpack_from(data, 0)

    _expect_length("manifest", data, U64.size + count * HASH_SIZE)

    return [
        ContentHash(data[offset:offset + HASH_SIZE])
        for offset in range(U64.size, len(data), HASH_SIZE)
    ]


def encode_root(root: GraphHash) -> bytes:
    return root.vertex_manifest_hash.digest + root.edge_manifest_hash.digest


def decode_root(data: bytes) -> GraphHash:
    _expect_length("root", data, ROOT_SIZE)
    return GraphHash(
        vertex_manifest_hash=ContentHash(data[:HASH_SIZE]),
        edge_manifest_hash=ContentHash(data[HASH_SIZE:]),
    )
