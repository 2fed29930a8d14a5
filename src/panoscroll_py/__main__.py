"""Entry point for python -m panoscroll_py."""

if __name__ == "__main__":
    from panoscroll_py.app import main
    main()
