"""
Start the tokenwatch API server with uvicorn
"""

import os

import uvicorn


def main():
    uvicorn.run(
        "tokenwatch.main:app",
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', '8000')),
        log_level=os.getenv('LOG_LEVEL', 'info').lower()
    )


if __name__ == '__main__':
    main()
