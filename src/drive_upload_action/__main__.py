from drive_upload_action.cli import main

main()
