"""
Cross-Platform Sound Player for ringring.

Plays one theme sound to completion through pygame's mixer, which handles
mp3, wav, ogg and flac on macOS, Linux and WSL.
"""

import os
from pathlib import Path
from typing import Union

from utils.colored_logger import setup_logger

# pygame prints a banner on import; hook stdout must stay clean
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

try:
    import pygame

    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False
    pygame = None

logger = setup_logger(__name__)


def play_sound(sound_path: Union[str, Path], volume: float = 0.5) -> bool:
    """
    Play a sound file using pygame. Blocks until playback finishes.

    Args:
        sound_path: Absolute path of the file to play
        volume (float): Volume level 0.0-1.0 (default: 0.5)

    Returns:
        bool: True if sound played successfully, False otherwise
    """
    if not PYGAME_AVAILABLE:
        logger.warning("pygame not available - install with 'pip install pygame'")
        return False

    sound_path = Path(sound_path)
    if not sound_path.is_file():
        logger.warning(f"Sound file not found: {sound_path}")
        return False

    try:
        # Initialize pygame mixer for audio playback
        pygame.mixer.init()

        # Load and play the audio
        pygame.mixer.music.load(str(sound_path))
        pygame.mixer.music.set_volume(volume)
        pygame.mixer.music.play()

        # Wait for playback to finish
        while pygame.mixer.music.get_busy():
            pygame.time.wait(100)

        logger.debug(f"Played {sound_path.name}")
        return True

    except Exception as e:
        logger.warning(f"Pygame audio error for {sound_path.name}: {e}")
        return False

    finally:
        try:
            pygame.mixer.quit()
        except Exception:
            pass
