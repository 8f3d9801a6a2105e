import sys
import traceback


def main() -> None:
    try:
        from heapgen.heapgen_main import Heapgen

        sys.exit(Heapgen.main())
    except SystemExit:
        raise
    except Exception as exc:
        sys.stderr.write(f"ERROR: Calling heapgen main function failed: {exc}\n")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
