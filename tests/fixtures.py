NETSTAT = """
Active Connections

  Proto  Local Address          Foreign Address        State           PID
  TCP    0.0.0.0:135            0.0.0.0:0              LISTENING       1044
  TCP    0.0.0.0:3000           0.0.0.0:0              LISTENING       12345
  TCP    127.0.0.1:3000         127.0.0.1:52144        ESTABLISHED     12345
  TCP    127.0.0.1:30000        0.0.0.0:0              LISTENING       999
  TCP    127.0.0.1:52144        127.0.0.1:3000         ESTABLISHED     4321
  TCP    127.0.0.1:3000         127.0.0.1:52200        TIME_WAIT       0
  TCP    [::]:3000              [::]:0                 LISTENING       23456
  UDP    0.0.0.0:3000           *:*                                    777
  UDP    [::]:5353              *:*                                    888
"""

LSOF = """\
COMMAND   PID USER   FD   TYPE             DEVICE SIZE/OFF NODE NAME
node    12345 user   23u  IPv4 0xa1b2c3d4e5f60001      0t0  TCP *:3000 (LISTEN)
node    12345 user   24u  IPv6 0xa1b2c3d4e5f60002      0t0  TCP *:3000 (LISTEN)
"""

LSOF_HEADER_ONLY = "COMMAND   PID USER   FD   TYPE DEVICE SIZE/OFF NODE NAME\n"
