import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import redis
from redis.commands.search.field import Field
from redis.commands.search.index_definition import IndexDefinition, IndexType
from redis.commands.search.query import Query

logger = logging.getLogger(__name__)


class RedisRepository:
    """
    Acceso a Redis sin lógica de negocio.
    - Documentos JSON (RedisJSON, path "$")
    - ZSET con scores numéricos
    - Índice de búsqueda (RediSearch) sobre los documentos JSON
    """

    def __init__(self, client: redis.Redis):
        # 🔗 Cliente compartido, creado en config/database.py
        self.client = client

    # ===============================================================
    # 📄 Documentos (key-value)
    # ===============================================================
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Devuelve el documento guardado en key, o None si no existe."""
        return self.client.json().get(key)

    def set(self, key: str, document: Dict[str, Any]) -> None:
        """Guarda (o pisa) el documento completo en key."""
        self.client.json().set(key, "$", document)
        logger.debug(f"Stored document {key}")

    def delete(self, *keys: str) -> int:
        """Elimina una o más claves. Devuelve cuántas existían."""
        if not keys:
            return 0
        return self.client.delete(*keys)

    def keys_with_prefix(self, prefix: str) -> Iterator[str]:
        """Itera las claves que empiezan con prefix (SCAN, no bloquea Redis)."""
        return self.client.scan_iter(match=f"{prefix}*")

    # ===============================================================
    # 🧠 Rankings (ZSET)
    # ===============================================================
    def zadd(self, name: str, score: float, member: str) -> int:
        return self.client.zadd(name, {member: score})

    def zrem(self, name: str, member: str) -> int:
        return self.client.zrem(name, member)

    def zrevrange(self, name: str, start: int, stop: int) -> List[str]:
        return self.client.zrevrange(name, start, stop)

    def zrevrange_with_scores(self, name: str, start: int, stop: int) -> List[Tuple[str, float]]:
        return self.client.zrevrange(name, start, stop, withscores=True)

    # ===============================================================
    # 🔎 Búsqueda (RediSearch)
    # ===============================================================
    def search_create_index(self, name: str, prefix: str, fields: Sequence[Field]) -> bool:
        """
        Crea el índice sobre documentos JSON con el prefijo dado.
        Devuelve False si ya existía (no es un error).
        """
        definition = IndexDefinition(prefix=[prefix], index_type=IndexType.JSON)
        try:
            self.client.ft(name).create_index(fields, definition=definition)
            return True
        except redis.exceptions.ResponseError as e:
            if "already exists" in str(e).lower():
                return False
            raise

    def search(self, name: str, query: str, limit: int = 1000) -> List[Optional[str]]:
        """Ejecuta la consulta y devuelve el JSON crudo de cada documento."""
        result = self.client.ft(name).search(Query(query).paging(0, limit))
        # redis-py expone el campo "$" de los índices JSON como doc.json
        return [getattr(doc, "json", None) for doc in result.docs]
