from dotenv import load_dotenv

load_dotenv()

from infrastructure.configuration.settings import settings  # noqa: E402
from server import server  # noqa: E402

server_app = server.handler


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        server_app,
        host=settings.server.HOST,
        port=settings.server.PORT,
        proxy_headers=True,
        forwarded_allow_ips=settings.server.FORWARDED_ALLOW_IPS,
    )
