"""
Handler for resolving Solana instruction fields with bounds checking and
payload decoding.
"""

import base64
import binascii
from typing import Any, List, Optional, Sequence

import base58
from solders.pubkey import Pubkey

from ..solana_error import InvalidInstructionError, InvalidProgramIdError


class InstructionHandler:
    """Stateless helpers shared by the program handlers and the extractor"""

    def normalize_account_key(self, entry: Any) -> Optional[str]:
        """
        Convert one accountKeys entry to its base58 string form.

        RPC responses carry plain strings for the json encoding and
        {"pubkey": ...} objects for jsonParsed; solders clients hand back
        Pubkey instances.
        """
        if isinstance(entry, str):
            return entry
        if isinstance(entry, Pubkey):
            return str(entry)
        if isinstance(entry, dict):
            pubkey = entry.get('pubkey')
            if pubkey is not None:
                return str(pubkey)
        return None

    def normalize_account_keys(self, account_keys: Sequence[Any]) -> List[Optional[str]]:
        return [self.normalize_account_key(entry) for entry in account_keys]

    def resolve_account(self, account_keys: Sequence[Optional[str]], index: Any) -> Optional[str]:
        """
        Look up an account key by index.

        Returns None for anything that is not a valid position in account_keys.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if index < 0 or index >= len(account_keys):
            return None
        return account_keys[index]

    def resolve_instruction_account(
        self,
        account_keys: Sequence[Optional[str]],
        instruction_accounts: Sequence[Any],
        position: int
    ) -> Optional[str]:
        """Resolve the account at a position of the instruction's account list"""
        if position >= len(instruction_accounts):
            return None
        return self.resolve_account(account_keys, instruction_accounts[position])

    def resolve_program_id(self, instruction: dict, account_keys: Sequence[Optional[str]]) -> str:
        program_id = self.resolve_account(account_keys, instruction.get('programIdIndex'))
        if program_id is None:
            raise InvalidProgramIdError(
                f"programIdIndex {instruction.get('programIdIndex')!r} out of range "
                f"for {len(account_keys)} account keys"
            )
        return program_id

    def decode_data(self, data: Any) -> bytes:
        """
        Decode instruction data into raw bytes.

        Accepts raw bytes, a list of byte values, a base58 string (the RPC json
        encoding) or a [payload, encoding] pair with base58 or base64 encoding.
        """
        if data is None:
            return b''
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
        if isinstance(data, str):
            return self._decode_base58(data)
        if isinstance(data, (list, tuple)):
            if len(data) == 2 and isinstance(data[0], str) and isinstance(data[1], str):
                payload, encoding = data
                if encoding == 'base64':
                    try:
                        return base64.b64decode(payload, validate=True)
                    except (binascii.Error, ValueError) as e:
                        raise InvalidInstructionError(f"invalid base64 instruction data: {e}") from e
                if encoding == 'base58':
                    return self._decode_base58(payload)
                raise InvalidInstructionError(f"unsupported instruction data encoding: {encoding}")
            try:
                return bytes(data)
            except (TypeError, ValueError) as e:
                raise InvalidInstructionError(f"invalid instruction byte list: {e}") from e
        raise InvalidInstructionError(f"unsupported instruction data type: {type(data).__name__}")

    def _decode_base58(self, payload: str) -> bytes:
        try:
            return base58.b58decode(payload)
        except ValueError as e:
            raise InvalidInstructionError(f"invalid base58 instruction data: {e}") from e

    def get_discriminant(self, data: bytes) -> Optional[int]:
        return data[0] if data else None
