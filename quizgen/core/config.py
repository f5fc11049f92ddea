from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # App Config
    APP_NAME: str = "QuizGen Topic Quiz Generator"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development" # "development" or "production"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    
    # LLM Config
    LLM_PROVIDER: str = "openai" # "openai" or "huggingface"
    
    # OpenAI compatible API (OpenAI, Gemini, DeepSeek, Ollama...)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    MODEL_NAME: str = "gpt-4o-mini"
    
    # Hugging Face Inference API
    HUGGINGFACE_API_TOKEN: Optional[str] = None
    HF_MODEL_ID: str = "meta-llama/Meta-Llama-3-8B-Instruct"
    
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 2048
    LLM_TIMEOUT: float = 60.0
    
    # Context retrieval (Wikipedia REST summary)
    CONTEXT_ENABLED: bool = True
    WIKIPEDIA_SUMMARY_URL: str = "https://en.wikipedia.org/api/rest_v1/page/summary/"
    CONTEXT_TIMEOUT: float = 5.0
    CONTEXT_USER_AGENT: str = "QuizGen/0.1"
    
    # Storage
    STORAGE_BACKEND: str = "redis" # "redis" or "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: Optional[str] = None
    REDIS_MAX_CONNECTIONS: int = 50
    REDIS_SOCKET_TIMEOUT: int = 5
    REDIS_SOCKET_CONNECT_TIMEOUT: int = 5
    REDIS_KEY_PREFIX: str = "quizgen"
    
    # History listing
    HISTORY_DEFAULT_LIMIT: int = 50
    HISTORY_MAX_LIMIT: int = 100
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()


def get_settings() -> Settings:
    return settings
