import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


# ==================================
# ⚡ Redis Connection
# ==================================
def get_redis_client(uri: str) -> redis.Redis:
    """
    Crea el cliente de Redis a partir de la URI.
    Las respuestas se decodifican a str (claves, miembros de ZSET y JSON).
    El cliente es thread-safe y se reutiliza en todo el proceso.
    """
    return redis.from_url(uri, decode_responses=True)


def probar_redis(client: redis.Redis) -> bool:
    """Prueba la conexión con PING. No lanza: devuelve False si falla."""
    try:
        client.ping()
        logger.info("⚡ Redis conectado.")
        return True
    except redis.exceptions.RedisError as e:
        logger.error(f"❌ Error al conectar a Redis: {e}")
        return False


def close_redis_client(client: Optional[redis.Redis]) -> None:
    """Libera las conexiones del pool al apagar la app."""
    if client is None:
        return
    logger.info("Cerrando conexión con Redis.")
    client.close()
