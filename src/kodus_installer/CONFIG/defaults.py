"""
Static stack defaults, network names and log markers.
"""
from typing import Dict, List, Tuple

DEFAULT_BASE_URL = "http://localhost:3000"
GRAFANA_URL = "http://localhost:3001"
RABBITMQ_MANAGEMENT_URL = "http://localhost:15672"
DOCKER_INSTALL_URL = "https://docs.docker.com/get-docker/"

COMPOSE_FILE_NAME = "docker-compose.yml"
SETUP_SCRIPT_NAME = "setup-db.sh"
ENV_FILE_NAME = ".env"
COMPOSE_COMMAND_VARIABLE = "KODUS_INSTALLER_COMPOSE_COMMAND"

DEFAULT_CONFIG: Dict[str, str] = {
    # Base configuration
    "WEB_NODE_ENV": "development",
    "WEB_HOSTNAME_API": "localhost",
    "WEB_PORT_API": "3001",
    "WEB_PORT": "3000",
    "WEB_NEXTAUTH_URL": "http://localhost:3000",

    "API_NODE_ENV": "development",
    "API_LOG_LEVEL": "error",
    "API_LOG_PRETTY": "true",
    "API_HOST": "0.0.0.0",
    "API_PORT": "3001",
    "API_RATE_MAX_REQUEST": "100",
    "API_RATE_INTERVAL": "1000",
    "API_JWT_EXPIRES_IN": "365d",
    "API_JWT_REFRESH_EXPIRES_IN": "7d",

    "GLOBAL_API_CONTAINER_NAME": "kodus-orchestrator-prod",

    # Database
    "API_DATABASE_ENV": "development",
    "API_PG_DB_USERNAME": "kodusdev",
    "API_PG_DB_DATABASE": "kodus_db",
    "API_PG_DB_HOST": "db_kodus_postgres",
    "API_PG_DB_PORT": "5432",

    "API_MG_DB_USERNAME": "kodusdev",
    "API_MG_DB_DATABASE": "kodus_db",
    "API_MG_DB_HOST": "db_kodus_mongodb",
    "API_MG_DB_PORT": "27017",
    "API_MG_DB_PRODUCTION_CONFIG": "",

    # LLM models
    "API_LLM_MODEL_CHATGPT_3_5_TURBO": "gpt-4o-mini",
    "API_LLM_MODEL_CHATGPT_3_5_TURBO_16K": "gpt-4o-mini",
    "API_LLM_MODEL_CHATGPT_4": "gpt-4o-mini",
    "API_LLM_MODEL_CHATGPT_4_TURBO": "gpt-4o-mini",
    "API_LLM_MODEL_CHATGPT_4_ALL": "gpt-4o",
    "API_LLM_MODEL_CHATGPT_4_ALL_MINI": "gpt-4o-mini",
    "API_LLM_MODEL_CLAUDE_3_5_SONNET": "claude-3-5-sonnet-20241022",
    "API_LLM_MODEL_CLAUDE_3_5_SONNET_20241022": "claude-3-5-sonnet-20241022",
    "API_LLM_MODEL_GEMINI_1_5_PRO": "gpt-4o-mini",
    "API_LLM_MODEL_GEMINI_1_5_PRO_EXP": "gpt-4o-mini",

    # RabbitMQ
    "RABBITMQ_DEFAULT_USER": "kodus",
}

# Keys filled by generate_secret_key() and generate_db_password() respectively.
SECRET_KEY_FIELDS: List[str] = [
    "WEB_NEXTAUTH_SECRET",
    "WEB_JWT_SECRET_KEY",
    "API_JWT_SECRET",
    "API_JWT_REFRESHSECRET",
]
PASSWORD_FIELDS: List[str] = [
    "API_PG_DB_PASSWORD",
    "API_MG_DB_PASSWORD",
    "RABBITMQ_DEFAULT_PASS",
    "GRAFANA_ADMIN_PASSWORD",
]

# (config key, prompt label)
LLM_API_KEYS: List[Tuple[str, str]] = [
    ("API_OPEN_AI_APIKEY", "OpenAI"),
    ("API_GOOGLE_AI_API_KEY", "Google AI"),
    ("API_ANTHROPIC_API_KEY", "Anthropic"),
    ("API_FIREWORKS_API_KEY", "Fireworks"),
    ("API_NOVITA_AI_API_KEY", "Novita AI"),
    ("API_VERTEX_AI_API_KEY", "Vertex AI"),
]

WEBHOOK_KEYS: Dict[str, str] = {
    "github": "API_GITHUB_CODE_MANAGEMENT_WEBHOOK",
    "gitlab": "API_GITLAB_CODE_MANAGEMENT_WEBHOOK",
    "bitbucket": "GLOBAL_BITBUCKET_CODE_MANAGEMENT_WEBHOOK",
}

DOCKER_NETWORKS: List[str] = [
    "shared-network",
    "monitoring-network",
    "kodus-backend-services",
]

POSTGRES_SERVICE = "db_kodus_postgres"
MONGODB_SERVICE = "db_kodus_mongodb"
APPLICATION_SERVICE = "orchestrator"

READINESS_MARKERS: Dict[str, str] = {
    POSTGRES_SERVICE: "database system is ready to accept connections",
    MONGODB_SERVICE: "Waiting for connections",
}

CRITICAL_ERRORS: Tuple[str, ...] = (
    "password authentication failed",
    "Unable to connect to the database",
    "FATAL:",
    "MongoServerError:",
    "connection refused",
)

# Checked once more after the database setup script has run.
DATABASE_CONNECTION_ERRORS: Tuple[str, ...] = (
    "database connection error",
    "Database connection failed",
)

APPLICATION_LOG_TAIL = 50
DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_POLL_INTERVAL = 10.0
