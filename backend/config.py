import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///darts.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma separated list of allowed origins, '*' for any
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    # Players per game
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '1'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '4'))
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '100'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
