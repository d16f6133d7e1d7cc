"""
Constants used across the extraction handlers.
"""

# Program addresses tracked by the extractor
TOKEN_PROGRAM_ID = 'TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA'
METADATA_PROGRAM_ID = 'metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s'

# Known program types
PROGRAM_TYPES = {
    TOKEN_PROGRAM_ID: 'token',
    METADATA_PROGRAM_ID: 'metadata',
}

# Instruction discriminants (first byte of instruction data)
TOKEN_TRANSFER_DISCRIMINANT = 3
METADATA_CREATE_DISCRIMINANT = 0

# Event tags
SPL_TOKEN = 'SPL_TOKEN'
SPL_TOKEN_INNER = 'SPL_TOKEN_INNER'
METAPLEX_NFT = 'METAPLEX_NFT'

# NFT metadata actions
ACTION_CREATE = 'CREATE'

U64_SIZE = 8
