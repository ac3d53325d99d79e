from conversation_memory.server import main

main()
