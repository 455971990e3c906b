from briefkit.server import create_app, main

# WSGI entry point, e.g. `gunicorn app:app`
app = create_app()

if __name__ == '__main__':
    main()
