from kanban.main import main

main()
