"""Usage and license texts shown by the help and copyright targets."""

PROGRAM_NAME = "vboxctl"

USAGE = """\
vboxctl makes it easy to interact with VirtualBox's VBoxManage tool

Command set: {start pause resume reset acpipowerbutton poweroff savestate list}
Target:
    - reserved set: {* running saved off program copyright help}
    - other: part of one or more VM names, or a single VM name, or a filename with VMs listed one per line

vboxctl [command] [target]

Examples:

    vboxctl start '*'                  (this will start all VMs)
    vboxctl reset DC                   (this would reset all VMs with 'DC' in the name)
    vboxctl pause MY-DC-001            (this would pause all VMs with 'MY-DC-001' in the name)
    vboxctl poweroff gameservers.txt   (this would power off all the VMs listed in the file)
    vboxctl acpipowerbutton GAME-SRV   (this is safer but possibly not supported by some VMs)
    vboxctl list '*'                   (this would list all the VMs)
    vboxctl list running               (this would list all the VMs that are running)
    vboxctl list DC > DCs.txt          (this would list one or more VMs that have 'DC' in the name)

Example crontab entry
    0 * * * * cd /home/user && vboxctl reset /home/user/gameservers.txt

    where gameservers.txt is a file with one or more target VMs.

NOTE: Target is relative when used to specify a file. Be sure to use the full path unless it is local.
"""

COPYRIGHT = """\
MIT License

Copyright 2018 James Wilmoth

Permission is hereby granted, free of charge, to any person obtaining a copy of this software and
associated documentation files (the "Software"), to deal in the Software without restriction,
including without limitation the rights to use, copy, modify, merge, publish, distribute,
sublicense, and/or sell copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all copies or
substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT
NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT
OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""
