from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession

@asynccontextmanager
async def transactional(session: AsyncSession):
    """
    Abre transacción si no hay una activa (una lectura previa ya pudo
    iniciarla por autobegin) y hace commit al salir; rollback ante error.
    """
    if not session.in_transaction():
        await session.begin()
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        raise
