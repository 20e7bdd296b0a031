from benchstream.executors.base import BaseExecutor
from benchstream.executors.fork import ForkExecutor
from benchstream.executors.popen import PopenExecutor
