#!/usr/bin/env python3
"""
MongoDB connection check

Connects with the configured URI, writes, reads and deletes a probe
document, and prints troubleshooting hints when anything fails.
"""

import asyncio
import re
import sys
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from wifi_portal.core.config import settings

PROBE_COLLECTION = "connection_test"
TIMEOUT_MS = 5000

HINTS = [
    "Verifica tu connection string (MONGODB_URI) en .env",
    "Asegúrate de tener acceso a internet",
    "Verifica que tu IP esté en la whitelist de MongoDB Atlas",
    "Usa 0.0.0.0/0 en Network Access de MongoDB Atlas",
]


def mask_uri(uri: str) -> str:
    """Hide the password part of a MongoDB URI"""
    return re.sub(r':[^:/@]*@', ':****@', uri)


async def check_connection(uri: str, database: str) -> bool:
    print("🔍 Probando conexión a MongoDB...")
    print(f"📝 URI: {mask_uri(uri)}")

    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=TIMEOUT_MS)
    try:
        collection = client[database][PROBE_COLLECTION]

        await client.admin.command("ping")
        print("✅ Conexión a MongoDB exitosa!")

        probe = {"message": "Conexión de prueba exitosa", "timestamp": datetime.now(timezone.utc)}
        result = await collection.insert_one(probe)
        print(f"✅ Documento guardado: {result.inserted_id}")

        found = await collection.find_one({"_id": result.inserted_id})
        print(f"✅ Documento leído: {found}")

        await collection.delete_many({})
        print("✅ Documentos de prueba limpiados")
        return True

    except PyMongoError as e:
        print(f"❌ Error de conexión: {e}")
        print("💡 Soluciones posibles:")
        for i, hint in enumerate(HINTS, 1):
            print(f"{i}. {hint}")
        return False

    finally:
        client.close()
        print("🔌 Conexión cerrada")


if __name__ == "__main__":
    ok = asyncio.run(check_connection(settings.MONGODB_URI, settings.MONGODB_DATABASE))
    sys.exit(0 if ok else 1)
