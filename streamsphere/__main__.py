# streamsphere/__main__.py
import uvicorn

from streamsphere.core.config import settings

def main() -> None:
    uvicorn.run("streamsphere.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    main()
