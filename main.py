"""Character View Demo 启动脚本"""

from charanim.main import main

if __name__ == "__main__":
    main()
