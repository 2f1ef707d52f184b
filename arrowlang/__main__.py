from arrowlang.main import main


if __name__ == "__main__":
    main()
