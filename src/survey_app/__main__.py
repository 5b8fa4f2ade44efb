from .app import main


def run():
    main().main_loop()


if __name__ == '__main__':
    run()
