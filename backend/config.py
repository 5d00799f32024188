import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Card catalog loaded once at startup; a bad file aborts startup
    CATALOG_PATH = os.environ.get('CATALOG_PATH') or os.path.join(BASE_DIR, 'duel', 'data', 'cards.json')
    # '*' or a comma separated list of origins (HTTP and Socket.IO)
    ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*')
    PORT = int(os.environ.get('PORT', '3001'))
    # Round resolution timers (milliseconds)
    REVEAL_DELAY_MS = int(os.environ.get('REVEAL_DELAY_MS', '1500'))
    RESOLVE_DELAY_MS = int(os.environ.get('RESOLVE_DELAY_MS', '2000'))
    # Optional: seed the deal/shuffle random source for reproducible matches
    MATCH_SEED = os.environ.get('MATCH_SEED')
