"""
╔══════════════════════════════════════════════════════════════╗
║           SPACE DEFENDER — Arcade Space Shooter              ║
║           Built with Python + Pygame                         ║
╚══════════════════════════════════════════════════════════════╝

ARCHITECTURE OVERVIEW:
    Game          — Scene controller: main loop, window, scene switching
    MenuScene     — Title menu (Start Game / Instructions / Quit)
    GameScene     — One play session: entities, overlap rules, game over
    SessionState  — Score, lives and active modifiers of a session
    Spawner       — Timed alien / asteroid / power-up generation
    powerups      — Dispatch table from pickup variant to effect
    TimerManager  — Frame-driven repeating and one-shot timers
    HighScoreStore — Persisted best score
    UI            — Text, menus and overlays
"""

__version__ = "1.0.0"
