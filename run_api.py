"""
Запуск API сервера и Telegram бота.
"""

import threading
import time
import uvicorn
from dotenv import load_dotenv

# Загружаем переменные окружения
load_dotenv()


def run_api_server():
    """Запускает FastAPI сервер."""
    from backend.app.config import settings

    # В потоке нельзя использовать reload=True из-за проблем с сигналами
    uvicorn.run(
        "backend.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=False,
    )


def run_telegram_bot():
    """Запускает Telegram бота."""
    from backend.app.config import settings
    from backend.bot.main import run_bot

    bot_token = settings.BOT_TOKEN.strip()
    if not bot_token or bot_token == "your_bot_token_here":
        print("[ERROR] BOT_TOKEN not set in .env file!")
        print("[ERROR] You can get your bot token from @BotFather in Telegram")
        print("[WARNING] Bot will not start.")
        return

    print(f"[INFO] Bot token found (length: {len(bot_token)})")
    run_bot(bot_token)


if __name__ == "__main__":
    from backend.app.config import settings

    print("=" * 50)
    print(f"  {settings.APP_NAME} - API Server + Bot")
    print("=" * 50)
    print()
    print(f"[INFO] Starting API server on http://{settings.HOST}:{settings.PORT}")
    print(f"[INFO] Docs: http://{settings.HOST}:{settings.PORT}/docs")
    print()

    # Запускаем API сервер в отдельном потоке
    api_thread = threading.Thread(target=run_api_server, daemon=True)
    api_thread.start()

    # Даём API серверу немного времени на запуск
    time.sleep(2)

    print("[INFO] API server started in background thread")
    print("[INFO] Starting Telegram bot...")
    print()

    try:
        run_telegram_bot()
        # без бота держим процесс ради API
        api_thread.join()
    except KeyboardInterrupt:
        print("\n[INFO] Shutting down...")
    finally:
        print("[INFO] Stopped")
