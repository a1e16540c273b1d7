"""Lua script loader for booking store Redis operations"""

from pathlib import Path


def load_lua_script(*, script_name: str) -> str:
    """
    Raises:
        FileNotFoundError: If the script file doesn't exist
    """
    script_path = Path(__file__).parent / f'{script_name}.lua'

    if not script_path.exists():
        raise FileNotFoundError(f'Lua script not found: {script_path}')

    return script_path.read_text(encoding='utf-8')


SUBMIT_BOOKING_SCRIPT = load_lua_script(script_name='submit_booking')
CANCEL_BOOKING_SCRIPT = load_lua_script(script_name='cancel_booking')
