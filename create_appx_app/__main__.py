from create_appx_app.pipeline import main

main()
