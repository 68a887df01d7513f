import os
from dotenv import load_dotenv

load_dotenv()


#Over here all the configurations are added within this class
class Config:
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
    # Fast model doubles as the fallback for every operation
    GEMINI_FAST_MODEL = os.getenv('GEMINI_FAST_MODEL', 'gemini-2.0-flash-lite')
    GEMINI_BALANCED_MODEL = os.getenv('GEMINI_BALANCED_MODEL', 'gemini-2.0-flash')
    AI_TEMPERATURE = float(os.getenv('AI_TEMPERATURE', '0.7'))
    AI_MAX_OUTPUT_TOKENS = int(os.getenv('AI_MAX_OUTPUT_TOKENS', '1024'))

    JWT_SECRET = os.getenv('JWT_SECRET')
    JWT_EXPIRES_IN = int(os.getenv('JWT_EXPIRES_IN', str(60 * 60 * 24 * 7)))

    DB_PATH = os.getenv('DB_PATH', 'blog.db')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
