"""
Configuration module for the tokenwatch service.
Contains environment variables and other configuration settings.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_DIR = os.getenv('LOG_DIR', 'logs')
LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'True').lower() == 'true'

# Batch Processing
MAX_BATCH_SIZE = int(os.getenv('MAX_BATCH_SIZE', '1000'))


class Config:
    """
    Configuration class for application settings.
    """
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

    # API Settings
    API_VERSION = "0.1.0"
    API_TITLE = "tokenwatch API"
    API_DESCRIPTION = "Extracts SPL token transfers and Metaplex NFT metadata events from Solana transactions"

    # Logging
    LOG_LEVEL = LOG_LEVEL
    LOG_DIR = LOG_DIR
    LOG_TO_FILE = LOG_TO_FILE

    # Batch Processing
    MAX_BATCH_SIZE = MAX_BATCH_SIZE
