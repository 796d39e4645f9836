import argparse
import logging
import sys

import monitor_input_control as MIC


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog='monitor_input_control')
    parser.add_argument('-m', '--mode', type=str, help='the monitor to target (PRIMARY, FIRST or NAME:<substring>)')
    parser.add_argument('-t', '--toggle', action='store_true', help='toggle between the two configured input sources')
    parser.add_argument('--port-1', type=str, help='the default input source to toggle to')
    parser.add_argument('--port-2', type=str, help='the alternate input source to toggle to')
    parser.add_argument('-g', '--get', type=str, help='print the current value of a setting', metavar='NAME')
    parser.add_argument('-s', '--set', nargs=2, help='set a setting to a value', metavar=('NAME', 'VALUE'))
    parser.add_argument(
        '-f', '--fade', type=int, nargs='?', const=20,
        help='fade brightness to black and back in this many steps', metavar='STEPS'
    )
    parser.add_argument('--delay', type=int, default=50, help='milliseconds between fade steps')
    parser.add_argument('-b', '--blackout', action='store_true', help='black the monitor out briefly')
    parser.add_argument('-l', '--list', action='store_true', help='list all monitors')
    parser.add_argument('-v', '--verbose', action='store_true', help='log debug messages to stderr')
    parser.add_argument('-V', '--version', action='store_true', help='print the current version')

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    if args.version:
        print(MIC.__version__)
    elif args.list:
        monitors = MIC.list_monitors_info()
        if len(monitors) == 0:
            print('No monitors detected')
        for i, monitor in enumerate(monitors):
            primary = ' [PRIMARY]' if monitor['primary'] else ''
            print(
                f'Display {i}: {monitor["name"]} at ({monitor["x"]}, {monitor["y"]})'
                f' {monitor["width"]}x{monitor["height"]}{primary}'
            )
    elif args.toggle:
        return 0 if MIC.toggle(mode=args.mode, port_1=args.port_1, port_2=args.port_2) else 1
    elif args.get is not None:
        value = MIC.get_setting(args.get, mode=args.mode)
        if value == MIC.UNSUPPORTED:
            print(f'{args.get}: Failed')
            return 1
        print(f'{args.get}: {value}')
    elif args.set is not None:
        name, value = args.set
        ok = MIC.set_setting(name, int(value) if value.isdigit() else value, mode=args.mode)
        print(f'{name} -> {value}' + ('' if ok else ' Failed'))
        return 0 if ok else 1
    elif args.fade is not None:
        return 0 if MIC.fade_to_black_and_restore(args.delay, args.fade, mode=args.mode) else 1
    elif args.blackout:
        return 0 if MIC.blackout(mode=args.mode) else 1
    else:
        print('No valid arguments')
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
