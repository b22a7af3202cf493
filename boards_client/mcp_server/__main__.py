from boards_client.mcp_server import main

main()
