from .game_gui import main

main()
