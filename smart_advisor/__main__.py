from smart_advisor.api.app import main

main()
