import cltoolbox

from GW2tools.commands import balance, check, restore, run


def main():
    cltoolbox.command(run)
    cltoolbox.command(check)
    cltoolbox.command(balance)
    cltoolbox.command(restore)
    cltoolbox.main()


if __name__ == "__main__":
    main()
