import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from config import ApiConfig

basic_security = HTTPBasic()

# Replaced by app.py with the loaded config
_api_config = ApiConfig()


def init(api_config):
    """Set the credentials requests are checked against."""
    global _api_config
    _api_config = api_config


def verify_basic_auth(credentials: HTTPBasicCredentials = Depends(basic_security)):
    correct_username = secrets.compare_digest(credentials.username.encode(), _api_config.username.encode())
    correct_password = secrets.compare_digest(credentials.password.encode(), _api_config.password.encode())
    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
