from ip_location.server import main

if __name__ == "__main__":
    main()
