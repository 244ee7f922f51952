"""Worker que consulta o DJe do TJSP por número OAB e reporta publicações ao webhook."""

__version__ = "0.1.0"
