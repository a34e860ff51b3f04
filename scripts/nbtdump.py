#!/usr/bin/env python3
import sys
import os
import logging

from nbtstruct import NBTFile, CompoundTag, ListTag
from nbtstruct.fields import ArrayTag

if 'DEBUG' in os.environ:
    logging.basicConfig()
    logger = logging.getLogger('nbtstruct')
    logger.setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s <nbt file>' % progname)
    sys.exit(1)


def dump_tag(label, tag, indent=0):
    padding = '  ' * indent
    kind = tag.tag_type.name

    if isinstance(tag, CompoundTag):
        print(f'{padding}{label}: {kind} ({len(tag)} entries)')
        for name, child in tag.items():
            dump_tag(repr(name), child, indent + 1)
    elif isinstance(tag, ListTag):
        print(f'{padding}{label}: {kind} of {tag.element_type.name} ({len(tag)} elements)')
        for idx, element in enumerate(tag):
            dump_tag(f'[{idx}]', element, indent + 1)
    elif isinstance(tag, ArrayTag):
        print(f'{padding}{label}: {kind} ({len(tag)} elements) {tag.value}')
    else:
        print(f'{padding}{label}: {kind} {tag.value!r}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    nbt = NBTFile(path)

    print(f'''Document:
  Name:        {nbt.name!r}
  Compression: {nbt.compression.name}''')

    dump_tag('root', nbt.root)
