import os
from dotenv import find_dotenv, load_dotenv

load_dotenv( find_dotenv() )

DB_NAME = os.getenv('DB_NAME', 'banka')
DB_USER = os.getenv('DB_USER')
DB_PASSWORD = os.getenv('DB_PASSWORD')
DB_HOST = os.getenv('DB_HOST') # set to the service name when running inside docker
DB_PORT = os.getenv('DB_PORT', '5432')

DATABASE_URL = os.getenv('DATABASE_URL')
if not DATABASE_URL:
    if DB_HOST:
        DATABASE_URL = f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    else:
        DATABASE_URL = "sqlite:///./banka.db"

JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
JWT_SECRET = os.getenv('JWT_SECRET', 'banka-development-secret-change-me-in-production')
# RS256 needs a key pair, HS* signs and verifies with the shared secret
PRIVATE_JWT_KEY = os.getenv('PRIVATE_JWT_KEY') or JWT_SECRET
PUBLIC_JWT_KEY = os.getenv('PUBLIC_JWT_KEY') or JWT_SECRET
EXP_MIN = int(os.getenv('EXP_MIN', '60'))

BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))
SEED_DB = os.getenv('SEED_DB', '1').lower() not in ('0', 'false', 'no')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

API_PREFIX = '/api/v1'
