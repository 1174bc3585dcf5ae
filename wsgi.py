from dotenv import load_dotenv
load_dotenv()

from quickpoll import create_app  # noqa: E402

application = create_app()

if __name__ == "__main__":
    application.run(port=8000)
